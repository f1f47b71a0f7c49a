"""Profile loader for form default values."""

import yaml
from pathlib import Path
from typing import Dict, Any, List
from dataclasses import dataclass, field

from .settings import get_configs_dir


@dataclass
class FormProfile:
    """Default values for a new ordering session.

    Attributes:
        name: Profile name (file stem)
        description: Human readable description
        details: OrderDetails field defaults (supplier, delivery, funding)
        items: Line item rows ({description, quantity, unit_price, article_number})
        adjustments: shipping_cost, tax_rate, discount_rate, discount_window_days
        credit_card: CreditCardRequest field defaults
    """
    name: str
    description: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    items: List[Dict[str, Any]] = field(default_factory=list)
    adjustments: Dict[str, Any] = field(default_factory=dict)
    credit_card: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormProfile':
        """Create FormProfile from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            details=data.get('details') or {},
            items=data.get('items') or [],
            adjustments=data.get('adjustments') or {},
            credit_card=data.get('credit_card') or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'details': self.details,
            'items': self.items,
            'adjustments': self.adjustments,
            'credit_card': self.credit_card,
        }


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory (configs/profiles)
    """
    return get_configs_dir() / "profiles"


def load_profile(profile_name: str = "default") -> FormProfile:
    """Load a form profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        FormProfile object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profiles_dir = get_profiles_dir()
    profile_path = profiles_dir / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Profile {profile_name} must be a mapping")

    data.setdefault('name', profile_name)
    return FormProfile.from_dict(data)


def list_available_profiles() -> List[str]:
    """List all available profile names.

    Returns:
        List of profile names (without .yaml extension)
    """
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> FormProfile:
    """Get default profile (always available).

    Returns:
        Default FormProfile
    """
    try:
        return load_profile("default")
    except FileNotFoundError:
        # Fallback: empty form
        return FormProfile(name="default", description="Leeres Formular")
