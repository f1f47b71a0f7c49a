"""Order number generator tab (Auftragsnummer)."""

import logging
from typing import Optional

from ..config import get_department_code
from ..engine.order_number import (
    MAX_INITIALS,
    SEQUENCE_WIDTH,
    current_year_code,
    extract_initials,
    format_sequence,
    increment_sequence,
    sequence_order_number,
)
from .shared_order_number import SharedOrderNumber

logger = logging.getLogger(__name__)

MAX_YEAR_LENGTH = 2
MAX_DEPARTMENT_LENGTH = 5


class OrderNumberGeneratorSession:
    """Editable order number components (year, department, initials, sequence).

    generate() builds a sequence-scheme number and publishes it to the shared
    order number, where both forms pick it up.
    """

    def __init__(self, order_number: SharedOrderNumber, contact_person: Optional[str] = None):
        self._order_number = order_number
        self._contact_person = contact_person
        self.reset()

    def reset(self) -> None:
        self.year = current_year_code()
        self.department = get_department_code()
        self.user_initials = extract_initials(self._contact_person)
        self.sequence = format_sequence(1)

    # Component setters with the input limits of the form

    def set_year(self, value: str) -> None:
        self.year = (value or "").strip()[:MAX_YEAR_LENGTH]

    def set_department(self, value: str) -> None:
        self.department = (value or "").strip().upper()[:MAX_DEPARTMENT_LENGTH]

    def set_user_initials(self, value: str) -> None:
        self.user_initials = (value or "").strip().upper()[:MAX_INITIALS]

    def set_sequence(self, value) -> None:
        self.sequence = format_sequence(str(value).strip()[:SEQUENCE_WIDTH] or 1)

    def increment_sequence(self) -> str:
        self.sequence = increment_sequence(self.sequence)
        return self.sequence

    def preview(self) -> str:
        """Number as it would be generated; missing parts shown as ??/???."""
        return "-".join([
            self.year or "??",
            self.department or "???",
            self.user_initials or "???",
            self.sequence or "???",
        ])

    def generate(self) -> str:
        """Generate the order number and share it with the forms.

        Raises:
            ValueError: If no initials are set
        """
        if not self.user_initials:
            raise ValueError("Bitte Initialen eingeben")
        number = sequence_order_number(
            sequence=self.sequence,
            year=self.year or None,
            department=self.department or None,
            initials=self.user_initials,
        )
        self._order_number.set(number)
        logger.info("Generated order number %s", number)
        return number
