"""Central configuration for Bestellsystem."""

import logging
import os
from decimal import Decimal
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT_CODE = "THA"
DEFAULT_TAX_RATE = Decimal("19")


def get_project_root() -> Path:
    """Repository root (bestellsystem/config/settings.py -> root)."""
    return Path(__file__).resolve().parent.parent.parent


def get_app_name() -> str:
    """Get application name."""
    return "Bestellsystem TH Aschaffenburg"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = get_project_root() / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except (OSError, ImportError, ValueError):
        # Fallback version if pyproject.toml cannot be read
        return "0.1.0"


def get_configs_dir() -> Path:
    """Get directory with YAML configuration (categories, profiles).

    Returns:
        BESTELLSYSTEM_CONFIG_DIR if set, otherwise <project root>/configs
    """
    env_path = os.getenv('BESTELLSYSTEM_CONFIG_DIR')
    if env_path:
        return Path(env_path)
    return get_project_root() / "configs"


def get_department_code() -> str:
    """Get department code used in order numbers.

    Returns:
        BESTELLSYSTEM_DEPARTMENT uppercased (max 5 characters), default "THA"
    """
    code = os.getenv('BESTELLSYSTEM_DEPARTMENT', DEFAULT_DEPARTMENT_CODE).strip().upper()
    if not code:
        return DEFAULT_DEPARTMENT_CODE
    if len(code) > 5:
        logger.warning(f"Department code '{code}' longer than 5 characters, truncating")
    return code[:5]


def get_default_tax_rate() -> Decimal:
    """Get default VAT rate for new orders.

    Returns:
        BESTELLSYSTEM_TAX_RATE as Decimal, default 19
    """
    env_value = os.getenv('BESTELLSYSTEM_TAX_RATE')
    if env_value is None:
        return DEFAULT_TAX_RATE
    from ..engine.number_parser import normalize_decimal
    try:
        rate = normalize_decimal(env_value)
    except ValueError:
        logger.warning(f"Invalid BESTELLSYSTEM_TAX_RATE '{env_value}', using {DEFAULT_TAX_RATE}")
        return DEFAULT_TAX_RATE
    if not 0 <= rate <= 100:
        logger.warning(f"BESTELLSYSTEM_TAX_RATE {rate} outside 0-100, using {DEFAULT_TAX_RATE}")
        return DEFAULT_TAX_RATE
    return rate


def get_default_profile_name() -> str:
    """Get name of the form profile used for new sessions (default: "default")."""
    return os.getenv('BESTELLSYSTEM_PROFILE', 'default')


def get_default_output_dir() -> Path:
    """Get default output directory for exports.

    Returns:
        BESTELLSYSTEM_OUTPUT_DIR if set, otherwise <project root>/out (created if needed)
    """
    env_path = os.getenv('BESTELLSYSTEM_OUTPUT_DIR')
    output_dir = Path(env_path) if env_path else get_project_root() / "out"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
