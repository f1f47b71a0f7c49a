"""Virtual credit card request form session."""

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

from ..config.profile_loader import FormProfile
from ..engine.number_parser import normalize_decimal
from ..engine.validation import FormValidationError, validate_credit_card_request
from ..models.credit_card_request import CreditCardRequest, CreditCardSubmission
from ..models.validation_result import ValidationResult
from .shared_order_number import SharedOrderNumber

logger = logging.getLogger(__name__)


def _parse_estimated_amount(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return normalize_decimal(value)
    except ValueError:
        logger.debug("Estimated amount %r is not a number, clearing it", value)
        return None


class CreditCardFormSession:
    """State of the credit card request form.

    The order number is not stored in the form: it is read from the shared
    order number whenever a request is built.
    """

    def __init__(
        self,
        order_number: SharedOrderNumber,
        profile: Optional[FormProfile] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._order_number = order_number
        self._clock = clock
        self._defaults = dict(profile.credit_card) if profile else {}
        self.reset()

    def reset(self) -> None:
        """Clear the form back to the profile defaults (request date: today)."""
        self._request = CreditCardRequest.from_dict(self._defaults)
        if self._request.request_date is None:
            self._request = replace(self._request, request_date=self._clock().date())

    @property
    def request(self) -> CreditCardRequest:
        return replace(self._request, order_number=self._order_number.get())

    def update(self, **values: Any) -> CreditCardRequest:
        """Set form fields.

        estimated_amount accepts raw input ("1.234,56"); unparsable text
        clears the amount. request_date accepts ISO strings.

        Raises:
            ValueError: If a field name is unknown
        """
        unknown = set(values) - CreditCardRequest.field_names()
        if unknown:
            raise ValueError(f"Unknown credit card fields: {sorted(unknown)}")
        if "order_number" in values:
            self._order_number.set(values.pop("order_number"))
        if "estimated_amount" in values:
            values["estimated_amount"] = _parse_estimated_amount(values["estimated_amount"])
        if isinstance(values.get("request_date"), str):
            raw_date = values["request_date"].strip()
            values["request_date"] = date.fromisoformat(raw_date) if raw_date else None
        self._request = replace(self._request, **values)
        return self.request

    def validate(self) -> ValidationResult:
        return validate_credit_card_request(self.request)

    def submit(self) -> CreditCardSubmission:
        """Validate and submit the request.

        Raises:
            FormValidationError: If required fields or agreements are missing
        """
        result = self.validate()
        if not result.is_valid:
            raise FormValidationError(result)
        for warning in result.warnings:
            logger.warning("Credit card request: %s", warning)
        submission = CreditCardSubmission(request=self.request, timestamp=self._clock())
        logger.info(
            "Credit card request submitted: %s, %s EUR",
            submission.request.supplier,
            submission.request.estimated_amount,
        )
        return submission
