"""LineItem data model representing one purchasable position on an order."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItem:
    """Represents one position (Position) on the order form.

    Important: line_total is derived from quantity and unit_price and can
    never be set on its own. Items are immutable; edits produce a new item.

    Attributes:
        id: Opaque unique token (creation order only, no meaning)
        description: Free-text article description
        quantity: Number of units (>= 1)
        unit_price: Price per unit in EUR (>= 0)
        article_number: Optional supplier article number (Artikelnummer)
    """

    id: str
    description: str = ""
    quantity: int = 1
    unit_price: Decimal = Decimal("0")
    article_number: str = ""

    def __post_init__(self):
        """Validate LineItem fields."""
        if not self.id:
            raise ValueError("LineItem id must not be empty")

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"quantity must be an int, got {self.quantity!r}")

        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")

        if not isinstance(self.unit_price, Decimal):
            raise ValueError(f"unit_price must be a Decimal, got {self.unit_price!r}")

        if self.unit_price < 0:
            raise ValueError(f"unit_price must be >= 0, got {self.unit_price}")

    @property
    def line_total(self) -> Decimal:
        """Total for this position (quantity × unit_price)."""
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary (amounts as 2dp strings)."""
        from ..engine.totals import format_amount
        return {
            "id": self.id,
            "article_number": self.article_number,
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": format_amount(self.unit_price),
            "line_total": format_amount(self.line_total),
        }
