"""Order totals computation (subtotal, VAT, shipping, Skonto)."""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from ..models.line_item import LineItem
from ..models.order_totals import OrderTotals
from .number_parser import (
    RawNumber,
    parse_amount,
    parse_days,
    parse_percentage,
)

DEFAULT_TAX_RATE = Decimal("19")

_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two fraction digits (half up).

    Works for amounts of any size; the context precision grows with the
    number of integer digits.
    """
    amount = Decimal(amount)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return str(amount.quantize(_CENT, rounding=ROUND_HALF_UP))


def recompute(
    items: Iterable[LineItem],
    shipping_cost: RawNumber = 0,
    tax_rate: RawNumber = DEFAULT_TAX_RATE,
    discount_rate: RawNumber = 0,
    discount_window_days: RawNumber = 0,
) -> OrderTotals:
    """Compute all order totals from the items and the four scalar inputs.

    Scalars may be raw form input; they are clamped like form fields:
    - shipping_cost: invalid or negative -> 0
    - tax_rate: unparsable -> 19, otherwise clamped to [0, 100]
    - discount_rate: unparsable -> 0, otherwise clamped to [0, 100]
    - discount_window_days: invalid or negative -> 0

    Order of operations:
    1. subtotal = Σ line_total
    2. tax_amount = (subtotal + shipping_cost) × tax_rate / 100 (0 if tax_rate is 0)
    3. gross_total = subtotal + shipping_cost + tax_amount
    4. discount_amount = gross_total × discount_rate / 100 only if both
       discount_rate > 0 and discount_window_days > 0
    5. net_after_discount = gross_total - discount_amount

    Nothing is rounded here; use OrderTotals.formatted() for display.
    """
    shipping = parse_amount(shipping_cost)
    tax = parse_percentage(tax_rate, default=DEFAULT_TAX_RATE)
    skonto_rate = parse_percentage(discount_rate)
    skonto_days = parse_days(discount_window_days)

    subtotal = sum((item.line_total for item in items), Decimal("0"))

    if tax > 0:
        tax_amount = (subtotal + shipping) * tax / _HUNDRED
    else:
        tax_amount = Decimal("0")

    gross_total = subtotal + shipping + tax_amount

    if skonto_rate > 0 and skonto_days > 0:
        discount_amount = gross_total * skonto_rate / _HUNDRED
    else:
        discount_amount = Decimal("0")

    return OrderTotals(
        subtotal=subtotal,
        shipping_cost=shipping,
        tax_rate=tax,
        tax_amount=tax_amount,
        gross_total=gross_total,
        discount_rate=skonto_rate,
        discount_window_days=skonto_days,
        discount_amount=discount_amount,
        net_after_discount=gross_total - discount_amount,
    )
