"""OrderSnapshot: immutable record handed to print and submission collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Tuple

if TYPE_CHECKING:
    from .line_item import LineItem
    from .order_details import OrderDetails
    from .order_totals import OrderTotals


@dataclass(frozen=True)
class OrderSnapshot:
    """Frozen state of an order at submission time.

    Attributes:
        order_number: Order number shared with the credit-card form ("" if none)
        details: Administrative form fields
        items: Line items at snapshot time
        totals: Totals recomputed from items at snapshot time
        timestamp: Timezone-aware creation time
    """

    order_number: str
    details: OrderDetails
    items: Tuple[LineItem, ...]
    totals: OrderTotals
    timestamp: datetime

    def __post_init__(self):
        """Validate OrderSnapshot fields."""
        if not self.items:
            raise ValueError("OrderSnapshot must contain at least one line item")

        if self.timestamp.tzinfo is None:
            raise ValueError("OrderSnapshot timestamp must be timezone-aware")

    @property
    def line_count(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "order_number": self.order_number,
            "details": self.details.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "totals": self.totals.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }
