"""Virtual credit card request models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

DELIVERY_COUNTRIES = ("deutschland", "eu-land", "drittland")

# Upper limit per request in EUR (Höchstwert)
MAX_ESTIMATED_AMOUNT = Decimal("5000")


@dataclass
class CreditCardRequest:
    """Request for a virtual credit card for an online order.

    Attributes:
        organization_unit: Requesting unit (Organisationseinheit)
        cost_center: Cost center (Kostenstelle)
        service_description: Description of the ordered service (Leistungsbeschreibung)
        supplier: Online supplier (Lieferant)
        estimated_amount: Estimated order value in EUR (max 5000)
        delivery_country: "deutschland", "eu-land" or "drittland"
        eu_regulation_agreement: Confirmation of the EU/third-country VAT notice
        ordering_agreement: Confirmation that the order is final
        notes: Notes for accounting
        request_date: Date of the request (Antragsdatum)
        order_number: Order number shared with the order form
    """

    organization_unit: str = ""
    cost_center: str = ""
    service_description: str = ""
    supplier: str = ""
    estimated_amount: Optional[Decimal] = None
    delivery_country: str = "deutschland"
    eu_regulation_agreement: bool = False
    ordering_agreement: bool = False
    notes: str = ""
    request_date: Optional[date] = None
    order_number: str = ""

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CreditCardRequest':
        """Create CreditCardRequest from a dictionary, ignoring unknown keys."""
        known = cls.field_names()
        values = {k: v for k, v in data.items() if k in known}
        if values.get("estimated_amount") is not None:
            from ..engine.number_parser import normalize_decimal
            values["estimated_amount"] = normalize_decimal(values["estimated_amount"])
        if isinstance(values.get("request_date"), str):
            values["request_date"] = date.fromisoformat(values["request_date"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["estimated_amount"] = (
            str(self.estimated_amount) if self.estimated_amount is not None else None
        )
        data["request_date"] = self.request_date.isoformat() if self.request_date else None
        return data


@dataclass(frozen=True)
class CreditCardSubmission:
    """A submitted credit card request awaiting processing."""

    request: CreditCardRequest
    timestamp: datetime
    status: str = "pending"

    def to_dict(self) -> Dict[str, Any]:
        data = self.request.to_dict()
        data["timestamp"] = self.timestamp.isoformat()
        data["status"] = self.status
        return data
