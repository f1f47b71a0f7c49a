"""Utilities for parsing raw form input into numbers with safe fallbacks."""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

RawNumber = Union[str, int, float, Decimal, None]

_CURRENCY_PATTERN = re.compile(r"(?i)€|\beur\b|\beuro\b")


def normalize_decimal(value: RawNumber) -> Decimal:
    """Normalize German or English numeric input to Decimal.

    Rules:
    - int, float and Decimal are converted directly (non-finite values rejected)
    - Trim whitespace, remove currency markers (€, EUR, Euro) and inner spaces
    - Support negative amounts with leading or trailing '-'
    - If both '.' and ',' occur, the one that comes last is the decimal
      separator and the other is a thousands separator ("1.234,56", "1,234.56")
    - A lone ',' is a decimal comma ("12,98"); several are thousands separators
    - A lone '.' is a decimal point ("12.98"); several are thousands separators
    - Raise ValueError for invalid formats
    """
    if value is None:
        raise ValueError("Input value is None")

    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")

    if isinstance(value, (int, float, Decimal)):
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid numeric value: {value!r}") from exc
        if not result.is_finite():
            raise ValueError(f"Non-finite numeric value: {value!r}")
        return result

    if not isinstance(value, str):
        raise ValueError(f"Unsupported input type: {type(value).__name__}")

    raw = value.strip()
    if not raw:
        raise ValueError("Input text is empty")

    cleaned = _CURRENCY_PATTERN.sub("", raw)
    cleaned = re.sub(r"\s+", "", cleaned)

    negative = False
    if cleaned.startswith("-"):
        negative = True
        cleaned = cleaned[1:]
    elif cleaned.startswith("+"):
        cleaned = cleaned[1:]
    if cleaned.endswith("-"):
        negative = not negative
        cleaned = cleaned[:-1]

    if not cleaned:
        raise ValueError("Input text has no numeric content")

    last_dot = cleaned.rfind(".")
    last_comma = cleaned.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        decimal_sep, thousands_sep = (",", ".") if last_comma > last_dot else (".", ",")
        integer_part, _, fraction = cleaned.rpartition(decimal_sep)
        _check_grouping(integer_part, thousands_sep, value)
        cleaned = integer_part.replace(thousands_sep, "") + "." + fraction
    elif cleaned.count(",") > 1:
        _check_grouping(cleaned, ",", value)
        cleaned = cleaned.replace(",", "")
    elif cleaned.count(".") > 1:
        _check_grouping(cleaned, ".", value)
        cleaned = cleaned.replace(".", "")
    else:
        cleaned = cleaned.replace(",", ".")

    if not re.fullmatch(r"\d+(\.\d+)?|\.\d+", cleaned):
        raise ValueError(f"Invalid numeric format: {value!r}")

    try:
        result = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric format: {value!r}") from exc

    return -result if negative else result


def _check_grouping(text: str, separator: str, original: Any) -> None:
    """Raise ValueError unless text is digits grouped by three with separator."""
    pattern = r"\d{1,3}(" + re.escape(separator) + r"\d{3})+"
    if not re.fullmatch(pattern, text):
        raise ValueError(f"Invalid thousands grouping: {original!r}")


def _try_normalize(value: Any) -> Optional[Decimal]:
    try:
        return normalize_decimal(value)
    except ValueError:
        return None


def parse_quantity(value: RawNumber) -> int:
    """Parse a quantity; fractions are truncated, invalid or < 1 becomes 1."""
    number = _try_normalize(value)
    if number is None:
        logger.debug("Quantity %r is not a number, using 1", value)
        return 1
    quantity = int(number)
    if quantity < 1:
        logger.debug("Quantity %r is below 1, using 1", value)
        return 1
    return quantity


def parse_unit_price(value: RawNumber) -> Decimal:
    """Parse a unit price; invalid or negative becomes 0."""
    return parse_amount(value)


def parse_amount(value: RawNumber) -> Decimal:
    """Parse a non-negative EUR amount; invalid or negative becomes 0."""
    number = _try_normalize(value)
    if number is None or number < 0:
        logger.debug("Amount %r is invalid, using 0", value)
        return Decimal("0")
    return number


def parse_percentage(value: RawNumber, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a percentage clamped to [0, 100]; unparsable input gives default."""
    number = _try_normalize(value)
    if number is None:
        logger.debug("Percentage %r is not a number, using %s", value, default)
        return default
    if number < 0:
        return Decimal("0")
    if number > 100:
        return Decimal("100")
    return number


def parse_days(value: RawNumber) -> int:
    """Parse a day count; invalid or negative becomes 0."""
    number = _try_normalize(value)
    if number is None or number < 0:
        return 0
    return int(number)
