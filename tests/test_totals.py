"""Unit tests for order totals computation."""

import random
from decimal import Decimal

import pytest

from bestellsystem.engine.line_items import items_from_dicts
from bestellsystem.engine.totals import format_amount, recompute
from bestellsystem.models.line_item import LineItem


@pytest.fixture
def sample_items():
    """Völkner Elektronik sample order items."""
    return items_from_dicts([
        {"quantity": 2, "unit_price": "12.98"},
        {"quantity": 1, "unit_price": "72.04"},
        {"quantity": 1, "unit_price": "75.90"},
    ])


def _item(quantity, unit_price):
    return LineItem(id=f"{quantity}-{unit_price}", quantity=quantity, unit_price=Decimal(unit_price))


class TestRecompute:
    """Test the order of operations."""

    def test_sample_order(self, sample_items):
        totals = recompute(sample_items, tax_rate=19)
        formatted = totals.formatted()
        assert formatted["subtotal"] == "173.90"
        assert formatted["tax_amount"] == "33.04"
        assert formatted["gross_total"] == "206.94"
        assert formatted["discount_amount"] == "0.00"
        assert formatted["net_after_discount"] == "206.94"

    def test_sample_order_with_skonto(self, sample_items):
        totals = recompute(sample_items, tax_rate=19, discount_rate=2, discount_window_days=14)
        formatted = totals.formatted()
        assert totals.discount_applies
        assert formatted["discount_amount"] == "4.14"
        assert formatted["net_after_discount"] == "202.80"

    def test_shipping_is_taxed(self):
        totals = recompute([_item(1, "100")], shipping_cost="10", tax_rate="19")
        assert totals.tax_amount == Decimal("20.90")
        assert totals.gross_total == Decimal("130.90")

    def test_no_rounding_before_formatting(self):
        totals = recompute([_item(1, "0.125")], tax_rate=0)
        assert totals.subtotal == Decimal("0.125")
        assert totals.formatted()["subtotal"] == "0.13"

    def test_zero_tax_rate_means_no_tax(self, sample_items):
        totals = recompute(sample_items, tax_rate=0)
        assert totals.tax_amount == Decimal("0")
        assert totals.gross_total == totals.subtotal

    def test_default_tax_rate_is_19(self):
        assert recompute([_item(1, "100")]).tax_amount == Decimal("19")

    @pytest.mark.parametrize("rate,days", [(2, 0), (0, 14), ("-2", 14), (2, "-1")])
    def test_discount_needs_rate_and_window(self, sample_items, rate, days):
        totals = recompute(sample_items, discount_rate=rate, discount_window_days=days)
        assert not totals.discount_applies
        assert totals.discount_amount == Decimal("0")
        assert totals.net_after_discount == totals.gross_total

    def test_invalid_scalars_are_clamped(self, sample_items):
        totals = recompute(
            sample_items,
            shipping_cost="-5",
            tax_rate="abc",
            discount_rate="250",
            discount_window_days="x",
        )
        assert totals.shipping_cost == Decimal("0")
        assert totals.tax_rate == Decimal("19")
        assert totals.discount_rate == Decimal("100")
        assert totals.discount_window_days == 0

    def test_empty_items(self):
        totals = recompute([])
        assert totals.gross_total == Decimal("0")

    def test_recompute_is_deterministic(self, sample_items):
        assert recompute(sample_items, 5, 7, 2, 10) == recompute(sample_items, 5, 7, 2, 10)


def test_totals_identities_hold_for_random_orders():
    """subtotal, gross and net always agree with their definitions."""
    rng = random.Random(4711)
    for _ in range(200):
        items = [
            _item(rng.randint(1, 20), f"{rng.randint(0, 50000) / 100:.2f}")
            for _ in range(rng.randint(1, 6))
        ]
        shipping = Decimal(rng.randint(0, 3000)) / 100
        tax_rate = Decimal(rng.choice([0, 7, 19, 100]))
        discount_rate = Decimal(rng.randint(0, 10))
        window = rng.randint(0, 30)

        totals = recompute(items, shipping, tax_rate, discount_rate, window)

        assert totals.subtotal == sum(i.quantity * i.unit_price for i in items)
        assert totals.tax_amount == (totals.subtotal + shipping) * tax_rate / 100
        assert totals.gross_total == totals.subtotal + shipping + totals.tax_amount
        assert totals.net_after_discount == totals.gross_total - totals.discount_amount
        assert totals.net_after_discount <= totals.gross_total
        assert totals.gross_total >= 0


@pytest.mark.parametrize(
    "amount,expected",
    [
        (Decimal("206.941"), "206.94"),
        (Decimal("0.005"), "0.01"),
        (Decimal("4.1388"), "4.14"),
        (Decimal("12"), "12.00"),
        (Decimal("0"), "0.00"),
    ],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


class TestLargeAmounts:
    """Test formatting of amounts beyond the default decimal precision."""

    def test_format_amount_many_integer_digits(self):
        amount = Decimal("1" + "0" * 27)
        assert format_amount(amount) == "1" + "0" * 27 + ".00"

    def test_format_amount_rounds_large_fraction(self):
        assert format_amount(Decimal("9" * 30 + ".005")) == "9" * 30 + ".01"

    def test_huge_unit_price_formats(self):
        items = items_from_dicts([{"unit_price": "1" + "0" * 27}])
        formatted = recompute(items).formatted()
        assert formatted["subtotal"] == "1" + "0" * 27 + ".00"
        assert formatted["gross_total"].endswith(".00")
        assert items[0].to_dict()["line_total"] == "1" + "0" * 27 + ".00"
