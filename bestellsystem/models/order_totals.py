"""OrderTotals data model holding the derived monetary totals of an order."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict


@dataclass(frozen=True)
class OrderTotals:
    """Derived totals for an order (no independent storage).

    All amounts are kept at full Decimal precision. Rounding to two
    fraction digits happens only in formatted().

    Attributes:
        subtotal: Sum of all line totals (Zwischensumme)
        shipping_cost: Shipping cost in EUR (Versandkosten)
        tax_rate: VAT percentage 0-100 (MwSt.)
        tax_amount: (subtotal + shipping_cost) × tax_rate / 100
        gross_total: subtotal + shipping_cost + tax_amount (Gesamtsumme)
        discount_rate: Skonto percentage 0-100
        discount_window_days: Days within which Skonto applies
        discount_amount: gross_total × discount_rate / 100 when Skonto applies
        net_after_discount: gross_total - discount_amount
    """

    subtotal: Decimal
    shipping_cost: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    gross_total: Decimal
    discount_rate: Decimal
    discount_window_days: int
    discount_amount: Decimal
    net_after_discount: Decimal

    @property
    def discount_applies(self) -> bool:
        """True if both Skonto rate and window are set."""
        return self.discount_rate > 0 and self.discount_window_days > 0

    def formatted(self) -> Dict[str, str]:
        """Return every monetary field formatted to exactly two decimals."""
        from ..engine.totals import format_amount
        return {
            "subtotal": format_amount(self.subtotal),
            "shipping_cost": format_amount(self.shipping_cost),
            "tax_amount": format_amount(self.tax_amount),
            "gross_total": format_amount(self.gross_total),
            "discount_amount": format_amount(self.discount_amount),
            "net_after_discount": format_amount(self.net_after_discount),
        }

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        data = self.formatted()
        data["tax_rate"] = str(self.tax_rate)
        data["discount_rate"] = str(self.discount_rate)
        data["discount_window_days"] = self.discount_window_days
        return data
