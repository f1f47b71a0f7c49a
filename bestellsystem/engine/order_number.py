"""Order number (Auftragsnummer) generation.

Two schemes are available and the caller chooses:

- sequence: "YY-DDD-III-SSS", built from year, department code, the contact
  person's initials and a caller-managed sequence number.
- unique: 25 characters, "YY" + "DDD" + hex characters of a random uuid.
"""

import logging
import random
import time
import uuid
from datetime import date
from enum import Enum
from typing import Optional, Union

from ..config import get_department_code

logger = logging.getLogger(__name__)

UNIQUE_ORDER_NUMBER_LENGTH = 25
MAX_INITIALS = 3
SEQUENCE_WIDTH = 3


class OrderNumberScheme(str, Enum):
    """Order number scheme."""
    SEQUENCE = "sequence"
    UNIQUE = "unique"


def current_year_code(today: Optional[date] = None) -> str:
    """Two-digit year ("25" for 2025)."""
    today = today or date.today()
    return f"{today.year % 100:02d}"


def extract_initials(contact_person: Optional[str], max_length: int = MAX_INITIALS) -> str:
    """Initials from a name: first letter of each token that starts with a letter.

    "Prof. Biedermann" -> "PB", "Dr. Anna Berta Cäsar" -> "DAB".
    Tokens starting with a digit or punctuation ("(extern)", "-") are skipped.
    """
    if not contact_person:
        return ""
    initials = [token[0].upper() for token in contact_person.split() if token[0].isalpha()]
    return "".join(initials)[:max_length]


def format_sequence(sequence: Union[int, str]) -> str:
    """Zero-pad a sequence number to three digits (7 -> "007")."""
    try:
        number = int(str(sequence).strip() or 0)
    except ValueError:
        logger.warning("Invalid order sequence %r, using 001", sequence)
        number = 1
    return str(max(number, 0)).zfill(SEQUENCE_WIDTH)


def increment_sequence(sequence: Union[int, str]) -> str:
    """Next sequence number ("001" -> "002"); unparsable input counts as 0."""
    try:
        current = int(str(sequence).strip())
    except ValueError:
        current = 0
    return str(current + 1).zfill(SEQUENCE_WIDTH)


def _resolve_prefix(year: Optional[str], department: Optional[str]) -> tuple:
    year_code = str(year) if year else current_year_code()
    department_code = (department or get_department_code()).upper()
    return year_code, department_code


def sequence_order_number(
    contact_person: Optional[str] = None,
    sequence: Union[int, str] = 1,
    year: Optional[str] = None,
    department: Optional[str] = None,
    initials: Optional[str] = None,
) -> str:
    """Build a sequence order number "YY-DDD-III-SSS".

    Args:
        contact_person: Name to derive initials from
        sequence: Caller-managed sequence number
        year: Two-digit year (default: current year)
        department: Department code (default: configured code, "THA")
        initials: Explicit initials (overrides contact_person, max 3 chars)

    Returns:
        Order number, e.g. "25-THA-PB-001". Deterministic for the same inputs;
        uniqueness depends on the caller managing the sequence.
    """
    year_code, department_code = _resolve_prefix(year, department)
    if initials is not None:
        user_initials = initials.strip().upper()[:MAX_INITIALS]
    else:
        user_initials = extract_initials(contact_person)
    return f"{year_code}-{department_code}-{user_initials}-{format_sequence(sequence)}"


def _random_hex() -> str:
    try:
        return uuid.uuid4().hex
    except (NotImplementedError, OSError) as e:
        # os.urandom unavailable: fall back to time + pseudo-random
        logger.warning("Random source unavailable (%s), using time-based fallback", e)
        return f"{time.time_ns():x}{random.getrandbits(128):032x}"


def unique_order_number(
    year: Optional[str] = None,
    department: Optional[str] = None,
) -> str:
    """Build a 25-character unique order number.

    Format: "YY" + department code + lowercase hex from a random uuid (hyphens
    stripped), cut or padded so the result has exactly 25 characters.
    """
    year_code, department_code = _resolve_prefix(year, department)
    prefix = f"{year_code}{department_code}"[:UNIQUE_ORDER_NUMBER_LENGTH]
    needed = UNIQUE_ORDER_NUMBER_LENGTH - len(prefix)

    token = _random_hex()
    while len(token) < needed:
        token += _random_hex()
    return prefix + token[:needed]


def generate(scheme: Union[OrderNumberScheme, str] = OrderNumberScheme.UNIQUE, **params) -> str:
    """Generate an order number with the given scheme.

    Args:
        scheme: "sequence" or "unique" (unknown values fall back to "unique")
        **params: Passed on to sequence_order_number() or unique_order_number()

    Returns:
        Generated order number (never raises for an unknown scheme)
    """
    try:
        scheme = OrderNumberScheme(scheme)
    except ValueError:
        logger.warning("Unknown order number scheme %r, using 'unique'", scheme)
        scheme = OrderNumberScheme.UNIQUE

    if scheme == OrderNumberScheme.SEQUENCE:
        return sequence_order_number(
            contact_person=params.get("contact_person"),
            sequence=params.get("sequence", 1),
            year=params.get("year"),
            department=params.get("department"),
            initials=params.get("initials"),
        )
    return unique_order_number(year=params.get("year"), department=params.get("department"))
