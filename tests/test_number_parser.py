"""Unit tests for German/English number parsing and clamping."""

from decimal import Decimal

import pytest

from bestellsystem.engine.number_parser import (
    normalize_decimal,
    parse_amount,
    parse_days,
    parse_percentage,
    parse_quantity,
    parse_unit_price,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("12,98", Decimal("12.98")),
        ("12.98", Decimal("12.98")),
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("1.234.567", Decimal("1234567")),
        ("1,234,567", Decimal("1234567")),
        ("1.234", Decimal("1.234")),
        ("75,90 €", Decimal("75.90")),
        ("EUR 1 234,50", Decimal("1234.50")),
        ("-12,50", Decimal("-12.50")),
        ("12,50-", Decimal("-12.50")),
        ("+7", Decimal("7")),
        (",5", Decimal("0.5")),
    ],
)
def test_normalize_decimal(text, expected):
    assert normalize_decimal(text) == expected


@pytest.mark.parametrize("value,expected", [(3, Decimal("3")), (2.5, Decimal("2.5")), (Decimal("1.10"), Decimal("1.10"))])
def test_normalize_decimal_numbers(value, expected):
    assert normalize_decimal(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", " ", "abc", "12..3", "1,2,3", "1.23,4.5", "€", "-", None, True, float("nan"), float("inf"), []],
)
def test_normalize_decimal_rejects_invalid(value):
    with pytest.raises(ValueError):
        normalize_decimal(value)


class TestParseQuantity:
    """Quantities are integers >= 1."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("3", 3), (5, 5), ("2,7", 2), ("2.7", 2), ("0", 1), ("-4", 1), ("", 1), ("abc", 1), (None, 1)],
    )
    def test_parse_quantity(self, raw, expected):
        assert parse_quantity(raw) == expected


class TestParseAmounts:
    """Amounts are non-negative Decimals."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("12,98", Decimal("12.98")), ("-1", Decimal("0")), ("x", Decimal("0")), (None, Decimal("0")), (0, Decimal("0"))],
    )
    def test_parse_unit_price(self, raw, expected):
        assert parse_unit_price(raw) == expected

    def test_parse_amount_keeps_precision(self):
        assert parse_amount("0,125") == Decimal("0.125")


class TestParsePercentage:
    """Percentages are clamped to [0, 100]."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("19", Decimal("19")), ("7,5", Decimal("7.5")), ("150", Decimal("100")), ("-3", Decimal("0"))],
    )
    def test_parse_percentage(self, raw, expected):
        assert parse_percentage(raw) == expected

    def test_unparsable_gives_default(self):
        assert parse_percentage("", default=Decimal("19")) == Decimal("19")
        assert parse_percentage("abc") == Decimal("0")

    def test_zero_is_kept(self):
        assert parse_percentage("0", default=Decimal("19")) == Decimal("0")


@pytest.mark.parametrize("raw,expected", [("14", 14), ("7,9", 7), ("-2", 0), ("", 0), (None, 0)])
def test_parse_days(raw, expected):
    assert parse_days(raw) == expected
