"""Order form session: line items, adjustments and details of one order."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from ..config import get_default_tax_rate
from ..config.category_loader import find_expense_category
from ..config.profile_loader import FormProfile, load_profile
from ..engine import line_items
from ..engine.number_parser import RawNumber, parse_amount, parse_days, parse_percentage
from ..engine.order_number import OrderNumberScheme, generate
from ..engine.totals import recompute
from ..engine.validation import FormValidationError, validate_order_details
from ..models.expense_category import ExpenseCategory
from ..models.line_item import LineItem
from ..models.order_details import OrderDetails
from ..models.order_snapshot import OrderSnapshot
from ..models.order_totals import OrderTotals
from ..models.validation_result import ValidationResult
from .shared_order_number import SharedOrderNumber

logger = logging.getLogger(__name__)

ADJUSTMENTS = ("shipping_cost", "tax_rate", "discount_rate", "discount_window_days")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderFormSession:
    """State of the order form (Bestellformular) for one user session.

    Every mutation recomputes the totals before returning, so totals always
    reflect the current items and adjustments.
    """

    def __init__(
        self,
        order_number: SharedOrderNumber,
        profile: Optional[FormProfile] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._order_number = order_number
        self._clock = clock
        self._profile_name = "blank"
        self._apply_profile(profile)

    def _apply_profile(self, profile: Optional[FormProfile]) -> None:
        adjustments = profile.adjustments if profile else {}
        self._details = OrderDetails.from_dict(profile.details) if profile else OrderDetails()
        self._items = line_items.items_from_dicts(profile.items if profile else None)
        self._shipping_cost = parse_amount(adjustments.get("shipping_cost", 0))
        default_tax = get_default_tax_rate()
        self._tax_rate = parse_percentage(adjustments.get("tax_rate", default_tax), default=default_tax)
        self._discount_rate = parse_percentage(adjustments.get("discount_rate", 0))
        self._discount_window_days = parse_days(adjustments.get("discount_window_days", 0))
        if profile:
            self._profile_name = profile.name
        self._recompute()

    def _recompute(self) -> None:
        self._totals = recompute(
            self._items,
            shipping_cost=self._shipping_cost,
            tax_rate=self._tax_rate,
            discount_rate=self._discount_rate,
            discount_window_days=self._discount_window_days,
        )

    # Read access

    @property
    def items(self) -> line_items.LineItems:
        return self._items

    @property
    def totals(self) -> OrderTotals:
        return self._totals

    @property
    def details(self) -> OrderDetails:
        return self._details

    @property
    def order_number(self) -> str:
        return self._order_number.get()

    @property
    def profile_name(self) -> str:
        return self._profile_name

    def get_item(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    @property
    def adjustments(self) -> dict:
        return {
            "shipping_cost": self._shipping_cost,
            "tax_rate": self._tax_rate,
            "discount_rate": self._discount_rate,
            "discount_window_days": self._discount_window_days,
        }

    # Line items

    def add_item(self) -> LineItem:
        """Append an empty position and return it."""
        self._items = line_items.add_item(self._items)
        self._recompute()
        return self._items[-1]

    def remove_item(self, item_id: str) -> bool:
        """Remove a position. Returns False if nothing was removed."""
        before = self._items
        self._items = line_items.remove_item(self._items, item_id)
        self._recompute()
        return self._items is not before

    def update_item(self, item_id: str, field: str, raw_value: Any) -> Optional[LineItem]:
        """Edit one field of a position; returns the updated item (None if unknown)."""
        self._items = line_items.update_item(self._items, item_id, field, raw_value)
        self._recompute()
        return self.get_item(item_id)

    # Adjustments

    def set_adjustment(self, name: str, raw_value: RawNumber) -> OrderTotals:
        """Set shipping_cost, tax_rate, discount_rate or discount_window_days."""
        if name == "shipping_cost":
            self._shipping_cost = parse_amount(raw_value)
        elif name == "tax_rate":
            self._tax_rate = parse_percentage(raw_value, default=get_default_tax_rate())
        elif name == "discount_rate":
            self._discount_rate = parse_percentage(raw_value)
        elif name == "discount_window_days":
            self._discount_window_days = parse_days(raw_value)
        else:
            raise ValueError(f"Unknown adjustment: {name!r} (expected one of {ADJUSTMENTS})")
        self._recompute()
        return self._totals

    def set_adjustments(self, **values: RawNumber) -> OrderTotals:
        for name, raw_value in values.items():
            if raw_value is not None:
                self.set_adjustment(name, raw_value)
        return self._totals

    # Details

    def update_details(self, **values: Any) -> OrderDetails:
        """Set administrative fields (supplier, delivery, funding).

        Raises:
            ValueError: If a field name is unknown or a value is out of range
        """
        unknown = set(values) - OrderDetails.field_names()
        if unknown:
            raise ValueError(f"Unknown order fields: {sorted(unknown)}")
        if values.get("funds_amount") is not None:
            values["funds_amount"] = parse_amount(values["funds_amount"])
        self._details = replace(self._details, **values)
        return self._details

    def select_cost_type(self, code: str) -> Optional[ExpenseCategory]:
        """Set the Kostenart; returns the matching category if the code is known."""
        self.update_details(cost_type=code)
        return find_expense_category(code)

    # Order number

    def generate_order_number(
        self,
        scheme: Union[OrderNumberScheme, str] = OrderNumberScheme.UNIQUE,
        sequence: Union[int, str] = 1,
        year: Optional[str] = None,
        department: Optional[str] = None,
        contact_person: Optional[str] = None,
    ) -> str:
        """Generate an order number for this order and share it with the session.

        Initials come from contact_person if given, otherwise from the
        contact person of the order details.
        """
        number = generate(
            scheme,
            contact_person=contact_person or self._details.contact_person,
            sequence=sequence,
            year=year,
            department=department,
        )
        self._order_number.set(number)
        return number

    # Submission

    def validate(self) -> ValidationResult:
        return validate_order_details(self._details)

    def snapshot(self) -> OrderSnapshot:
        """Freeze the current form state (no validation)."""
        totals = recompute(self._items, **self.adjustments)
        return OrderSnapshot(
            order_number=self._order_number.get(),
            details=replace(self._details),
            items=self._items,
            totals=totals,
            timestamp=self._clock(),
        )

    def submit(self) -> OrderSnapshot:
        """Validate and snapshot the order.

        Raises:
            FormValidationError: If required fields are missing
        """
        result = self.validate()
        if not result.is_valid:
            raise FormValidationError(result)
        snapshot = self.snapshot()
        logger.info(
            "Order submitted: %s, %d item(s), gross %s",
            snapshot.order_number or "(no order number)",
            snapshot.line_count,
            snapshot.totals.formatted()["gross_total"],
        )
        return snapshot

    # Profiles

    def load_profile(self, profile: Union[FormProfile, str]) -> None:
        """Replace the whole form with the values of a profile."""
        if isinstance(profile, str):
            profile = load_profile(profile)
        self._apply_profile(profile)

    def load_sample(self) -> None:
        """Fill the form with the sample order (Völkner Elektronik)."""
        self.load_profile("sample")
