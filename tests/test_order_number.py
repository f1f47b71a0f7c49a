"""Unit tests for order number generation."""

import re
from datetime import date
from unittest.mock import patch

import pytest

from bestellsystem.engine.order_number import (
    UNIQUE_ORDER_NUMBER_LENGTH,
    OrderNumberScheme,
    current_year_code,
    extract_initials,
    format_sequence,
    generate,
    increment_sequence,
    sequence_order_number,
    unique_order_number,
)


class TestInitials:
    """Test initials extraction."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Prof. Biedermann", "PB"),
            ("Dr. Anna Berta Cäsar", "DAB"),
            ("max mustermann", "MM"),
            ("Anna (extern) Schmidt", "AS"),
            ("  Lena   Vogel ", "LV"),
            ("", ""),
            (None, ""),
            ("123 456", ""),
        ],
    )
    def test_extract_initials(self, name, expected):
        assert extract_initials(name) == expected


class TestSequence:
    """Test sequence formatting."""

    @pytest.mark.parametrize("value,expected", [(1, "001"), ("7", "007"), ("42", "042"), (123, "123"), ("abc", "001")])
    def test_format_sequence(self, value, expected):
        assert format_sequence(value) == expected

    @pytest.mark.parametrize("value,expected", [("001", "002"), ("009", "010"), (41, "042"), ("x", "001")])
    def test_increment_sequence(self, value, expected):
        assert increment_sequence(value) == expected


class TestSequenceOrderNumber:
    """Test scheme YY-DDD-III-SSS."""

    def test_format(self):
        assert sequence_order_number("Prof. Biedermann", 1, year="25", department="THA") == "25-THA-PB-001"

    def test_deterministic(self):
        first = sequence_order_number("Anna Schmidt", "12", year="25", department="THA")
        assert first == sequence_order_number("Anna Schmidt", "12", year="25", department="THA")

    def test_defaults_from_configuration(self, monkeypatch):
        monkeypatch.setenv("BESTELLSYSTEM_DEPARTMENT", "ing")
        number = sequence_order_number("Prof. Biedermann")
        assert number == f"{current_year_code()}-ING-PB-001"

    def test_explicit_initials(self):
        assert sequence_order_number(initials="abcd", year="25", department="THA", sequence=3) == "25-THA-ABC-003"


class TestUniqueOrderNumber:
    """Test 25-character unique numbers."""

    def test_length_and_prefix(self):
        number = unique_order_number(year="25", department="THA")
        assert len(number) == UNIQUE_ORDER_NUMBER_LENGTH
        assert number.startswith("25THA")
        assert re.fullmatch(r"[0-9a-f]{20}", number[5:])

    def test_numbers_differ(self):
        numbers = {unique_order_number() for _ in range(100)}
        assert len(numbers) == 100

    def test_long_department_still_25_chars(self):
        assert len(unique_order_number(year="25", department="ABCDE")) == UNIQUE_ORDER_NUMBER_LENGTH

    def test_fallback_when_random_source_fails(self):
        with patch("bestellsystem.engine.order_number.uuid.uuid4", side_effect=NotImplementedError("no urandom")):
            number = unique_order_number(year="25", department="THA")
        assert len(number) == UNIQUE_ORDER_NUMBER_LENGTH
        assert re.fullmatch(r"25THA[0-9a-f]{20}", number)


class TestGenerate:
    """Test scheme dispatch."""

    def test_default_is_unique(self):
        assert len(generate()) == UNIQUE_ORDER_NUMBER_LENGTH

    def test_sequence_scheme(self):
        number = generate(OrderNumberScheme.SEQUENCE, contact_person="Prof. Biedermann", sequence=5, year="25")
        assert number == "25-THA-PB-005"

    def test_scheme_as_string(self):
        assert generate("sequence", contact_person="Lena Vogel", year="24", department="THA") == "24-THA-LV-001"

    def test_unknown_scheme_falls_back_to_unique(self, caplog):
        number = generate("bogus")
        assert len(number) == UNIQUE_ORDER_NUMBER_LENGTH
        assert "Unknown order number scheme" in caplog.text


def test_current_year_code():
    assert current_year_code(date(2025, 6, 1)) == "25"
    assert current_year_code(date(2009, 1, 1)) == "09"
