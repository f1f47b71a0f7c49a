"""Configuration package."""

from .settings import (
    get_app_name,
    get_app_version,
    get_configs_dir,
    get_default_output_dir,
    get_default_profile_name,
    get_default_tax_rate,
    get_department_code,
)

__all__ = [
    'get_app_name',
    'get_app_version',
    'get_configs_dir',
    'get_default_output_dir',
    'get_default_profile_name',
    'get_default_tax_rate',
    'get_department_code',
]
