"""Required-field validation for the order and credit card forms."""

from ..models.credit_card_request import (
    DELIVERY_COUNTRIES,
    MAX_ESTIMATED_AMOUNT,
    CreditCardRequest,
)
from ..models.order_details import OrderDetails
from ..models.validation_result import ValidationResult

ORDER_REQUIRED_FIELDS = {
    "supplier_name": "Firmenname ist erforderlich",
    "supplier_address": "Adresse ist erforderlich",
}

CREDIT_CARD_REQUIRED_FIELDS = {
    "organization_unit": "Organisationseinheit ist erforderlich",
    "cost_center": "Kostenstelle ist erforderlich",
    "service_description": "Leistungsbeschreibung ist erforderlich",
    "supplier": "Lieferant ist erforderlich",
}

AGREEMENTS_MESSAGE = "Bitte bestätigen Sie alle erforderlichen Vereinbarungen."


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_order_details(details: OrderDetails) -> ValidationResult:
    """Check that the required order form fields are filled in.

    Totals are never validated; an order with a zero total is still valid.
    """
    result = ValidationResult()
    for field_name, message in ORDER_REQUIRED_FIELDS.items():
        if _is_blank(getattr(details, field_name)):
            result.add_error(field_name, message)
    return result


def validate_credit_card_request(request: CreditCardRequest) -> ValidationResult:
    """Check required fields and agreements of a credit card request.

    Errors:
    - Required text fields missing
    - estimated_amount missing or not greater than 0
    - delivery_country missing or not one of the three options
    - request_date missing
    - One of the two agreements not confirmed

    Warnings:
    - estimated_amount above the 5000 EUR limit
    """
    result = ValidationResult()

    for field_name, message in CREDIT_CARD_REQUIRED_FIELDS.items():
        if _is_blank(getattr(request, field_name)):
            result.add_error(field_name, message)

    if request.estimated_amount is None:
        result.add_error("estimated_amount", "Auftragswert ist erforderlich")
    elif request.estimated_amount <= 0:
        result.add_error("estimated_amount", "Betrag muss größer als 0 sein")
    elif request.estimated_amount > MAX_ESTIMATED_AMOUNT:
        result.warnings.append("Betrag überschreitet das Limit von 5000 EUR")

    if request.delivery_country not in DELIVERY_COUNTRIES:
        result.add_error("delivery_country", "Lieferland ist erforderlich")

    if request.request_date is None:
        result.add_error("request_date", "Antragsdatum ist erforderlich")

    if not (request.eu_regulation_agreement and request.ordering_agreement):
        result.add_error("agreements", AGREEMENTS_MESSAGE)

    return result


class FormValidationError(Exception):
    """Raised when a form is submitted with missing required fields."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(sorted(result.errors))
        super().__init__(f"Missing or invalid fields: {fields}")
