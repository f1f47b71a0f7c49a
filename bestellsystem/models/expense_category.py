"""ExpenseCategory data model (Kostenart reference entry)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ExpenseCategory:
    """One expense category code from the static reference table.

    Attributes:
        code: Five-digit category code (e.g. "60100")
        name: Short category name
        description: Typical purchases booked under this code
        examples: Optional example articles
    """

    code: str
    name: str
    description: str = ""
    examples: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.code:
            raise ValueError("ExpenseCategory code must not be empty")
        if not self.name:
            raise ValueError(f"ExpenseCategory {self.code} has no name")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExpenseCategory':
        return cls(
            code=str(data.get("code", "")),
            name=data.get("name", ""),
            description=data.get("description", ""),
            examples=tuple(data.get("examples") or ()),
        )

    @property
    def label(self) -> str:
        """Label for selection controls ("60100 - Geschäftsbedarf")."""
        return f"{self.code} - {self.name}"
