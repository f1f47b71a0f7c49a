"""Line item list operations for the order form.

Item lists are tuples. Every operation returns a new tuple; items that are
not touched are the identical objects, and operations that change nothing
return the input tuple itself.
"""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Tuple

from ..models.line_item import LineItem
from .number_parser import parse_quantity, parse_unit_price

logger = logging.getLogger(__name__)

LineItems = Tuple[LineItem, ...]

# Accepted field names (form names in camelCase map to attribute names)
FIELD_ALIASES = {
    "quantity": "quantity",
    "unit_price": "unit_price",
    "unitPrice": "unit_price",
    "description": "description",
    "article_number": "article_number",
    "articleNumber": "article_number",
    "artikelnummer": "article_number",
}


def _new_item_id() -> str:
    return uuid.uuid4().hex


def new_item(**values: Any) -> LineItem:
    """Create an empty item (quantity 1, price 0) with a fresh id."""
    return LineItem(id=_new_item_id(), **values)


def new_item_list() -> LineItems:
    """Starting list of the order form: exactly one empty item."""
    return (new_item(),)


def add_item(items: LineItems) -> LineItems:
    """Append a new empty item."""
    return tuple(items) + (new_item(),)


def remove_item(items: LineItems, item_id: str) -> LineItems:
    """Remove the item with item_id.

    The last remaining item is never removed; unknown ids change nothing.
    """
    if len(items) <= 1:
        logger.debug("Not removing item %s: order needs at least one item", item_id)
        return items

    remaining = tuple(item for item in items if item.id != item_id)
    if len(remaining) == len(items):
        logger.warning("Cannot remove line item %s: not found", item_id)
        return items
    return remaining


def update_item(items: LineItems, item_id: str, field: str, raw_value: Any) -> LineItems:
    """Set one field of one item from raw form input.

    quantity and unit_price are parsed and clamped (see number_parser);
    description and article_number are stored verbatim. An unknown item_id
    returns items unchanged.

    Raises:
        ValueError: If field is not an editable line item field
    """
    attribute = FIELD_ALIASES.get(field)
    if attribute is None:
        raise ValueError(
            f"Unknown line item field: {field!r} "
            f"(expected one of {sorted(set(FIELD_ALIASES.values()))})"
        )

    for index, item in enumerate(items):
        if item.id == item_id:
            break
    else:
        logger.warning("Cannot update line item %s: not found", item_id)
        return items

    if attribute == "quantity":
        value = parse_quantity(raw_value)
    elif attribute == "unit_price":
        value = parse_unit_price(raw_value)
    else:
        value = "" if raw_value is None else str(raw_value)

    updated = replace(item, **{attribute: value})
    return tuple(items[:index]) + (updated,) + tuple(items[index + 1:])


def items_from_dicts(rows) -> LineItems:
    """Build an item list from plain dicts (profiles, order files, API input).

    Every row gets a fresh id; values pass through the same clamping as form
    edits. An empty input gives the one-empty-item starting list.
    """
    items = []
    for row in rows or []:
        if not isinstance(row, dict):
            raise ValueError(f"Item must be a mapping, got {type(row).__name__}: {row!r}")
        article_number = row.get("article_number", row.get("artikelnummer", ""))
        items.append(new_item(
            description=str(row.get("description", "") or ""),
            quantity=parse_quantity(row.get("quantity", 1)),
            unit_price=parse_unit_price(row.get("unit_price", row.get("unitPrice", Decimal("0")))),
            article_number=str(article_number or ""),
        ))
    return tuple(items) if items else new_item_list()
