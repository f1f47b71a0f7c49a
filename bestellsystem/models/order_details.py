"""OrderDetails data model for the administrative fields of the order form."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass
class OrderDetails:
    """Supplier, delivery and funding fields of an order (Bestellformular).

    None of these fields influence the totals. Only supplier_name and
    supplier_address are required for submission.

    Attributes:
        supplier_name: Supplier company (Firma)
        supplier_address: Supplier address (Adresse)
        supplier_fax: Supplier fax number
        delivery_building: Building/room for delivery (Gebäude/Raum)
        contact_person: Contact person at the university (Kontaktperson)
        contact_phone: Contact phone
        contact_fax: Contact fax
        chapter: Budget chapter (Kapitel)
        title_tg: Budget title / title group (Titel/TG)
        cost_center: Cost center (Kostenstelle)
        cost_bearer: Cost bearer (Kostenträger)
        expenditure_type: Expenditure type (Ausgabeart AZA)
        cost_type: Expense category code (Kostenart)
        funds_amount: Approved funds amount (Mittelbetrag)
        business_use: True if used for business purposes (unternehmerische Verwendung)
        business_use_percent: Business use share 0-100
        order_date: Order date
        notes: Free-text notes (Anmerkungen)
    """

    supplier_name: str = ""
    supplier_address: str = ""
    supplier_fax: str = ""
    delivery_building: str = ""
    contact_person: str = ""
    contact_phone: str = ""
    contact_fax: str = ""
    chapter: str = ""
    title_tg: str = ""
    cost_center: str = ""
    cost_bearer: str = ""
    expenditure_type: str = ""
    cost_type: str = ""
    funds_amount: Optional[Decimal] = None
    business_use: bool = False
    business_use_percent: int = 0
    order_date: Optional[date] = None
    notes: str = ""

    def __post_init__(self):
        """Validate OrderDetails fields."""
        if not 0 <= self.business_use_percent <= 100:
            raise ValueError(
                f"business_use_percent must be between 0 and 100, "
                f"got {self.business_use_percent}"
            )

    @classmethod
    def field_names(cls) -> set:
        """Names of all settable fields."""
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderDetails':
        """Create OrderDetails from a dictionary, ignoring unknown keys."""
        known = cls.field_names()
        values = {k: v for k, v in data.items() if k in known}
        if values.get("funds_amount") is not None:
            from ..engine.number_parser import parse_amount
            values["funds_amount"] = parse_amount(values["funds_amount"])
        if isinstance(values.get("order_date"), str):
            values["order_date"] = date.fromisoformat(values["order_date"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        data = asdict(self)
        data["funds_amount"] = str(self.funds_amount) if self.funds_amount is not None else None
        data["order_date"] = self.order_date.isoformat() if self.order_date else None
        return data
