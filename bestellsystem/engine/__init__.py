"""Order form computation: line items, totals and order numbers."""

from .line_items import add_item, new_item_list, remove_item, update_item
from .order_number import OrderNumberScheme, generate
from .totals import format_amount, recompute

__all__ = [
    "add_item",
    "new_item_list",
    "remove_item",
    "update_item",
    "recompute",
    "format_amount",
    "generate",
    "OrderNumberScheme",
]
