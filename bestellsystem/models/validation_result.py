"""ValidationResult data model representing form validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ValidationResult:
    """Validation result for a form.

    Only required-field presence is checked; totals never fail validation.

    Attributes:
        errors: Mapping field name -> error message (blocks submission)
        warnings: Messages shown to the user without blocking submission
    """

    errors: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors were recorded."""
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        # First message per field wins, as in the form display
        self.errors.setdefault(field_name, message)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": dict(self.errors),
            "warnings": list(self.warnings),
        }
