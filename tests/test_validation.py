"""Unit tests for required-field validation."""

from datetime import date
from decimal import Decimal

import pytest

from bestellsystem.engine.validation import (
    AGREEMENTS_MESSAGE,
    FormValidationError,
    validate_credit_card_request,
    validate_order_details,
)
from bestellsystem.models.credit_card_request import CreditCardRequest
from bestellsystem.models.order_details import OrderDetails
from bestellsystem.models.validation_result import ValidationResult


@pytest.fixture
def complete_request():
    return CreditCardRequest(
        organization_unit="Technische Hochschule Aschaffenburg",
        cost_center="6606105",
        service_description="Messgeräte",
        supplier="Völkner Elektronik",
        estimated_amount=Decimal("206.94"),
        delivery_country="deutschland",
        eu_regulation_agreement=True,
        ordering_agreement=True,
        request_date=date(2025, 3, 14),
    )


class TestOrderValidation:
    """Order form requires supplier name and address."""

    def test_empty_form_is_invalid(self):
        result = validate_order_details(OrderDetails())
        assert not result.is_valid
        assert result.errors == {
            "supplier_name": "Firmenname ist erforderlich",
            "supplier_address": "Adresse ist erforderlich",
        }

    def test_whitespace_counts_as_missing(self):
        result = validate_order_details(OrderDetails(supplier_name="  ", supplier_address="Weg 1"))
        assert list(result.errors) == ["supplier_name"]

    def test_complete_form_is_valid(self):
        result = validate_order_details(OrderDetails(supplier_name="Völkner", supplier_address="Nürnberg"))
        assert result.is_valid
        assert result.errors == {}


class TestCreditCardValidation:
    """Credit card requests require fields, amount and agreements."""

    def test_complete_request_is_valid(self, complete_request):
        assert validate_credit_card_request(complete_request).is_valid

    def test_empty_request(self):
        result = validate_credit_card_request(CreditCardRequest())
        for field_name in (
            "organization_unit",
            "cost_center",
            "service_description",
            "supplier",
            "estimated_amount",
            "request_date",
            "agreements",
        ):
            assert field_name in result.errors
        assert result.errors["agreements"] == AGREEMENTS_MESSAGE

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
    def test_amount_must_be_positive(self, complete_request, amount):
        request = CreditCardRequest(**{**complete_request.__dict__, "estimated_amount": amount})
        result = validate_credit_card_request(request)
        assert result.errors == {"estimated_amount": "Betrag muss größer als 0 sein"}

    def test_amount_above_limit_is_warning(self, complete_request):
        request = CreditCardRequest(**{**complete_request.__dict__, "estimated_amount": Decimal("5000.01")})
        result = validate_credit_card_request(request)
        assert result.is_valid
        assert result.warnings == ["Betrag überschreitet das Limit von 5000 EUR"]

    def test_unknown_delivery_country(self, complete_request):
        request = CreditCardRequest(**{**complete_request.__dict__, "delivery_country": "mars"})
        assert "delivery_country" in validate_credit_card_request(request).errors

    @pytest.mark.parametrize("eu,ordering", [(True, False), (False, True), (False, False)])
    def test_both_agreements_required(self, complete_request, eu, ordering):
        request = CreditCardRequest(**{
            **complete_request.__dict__,
            "eu_regulation_agreement": eu,
            "ordering_agreement": ordering,
        })
        assert validate_credit_card_request(request).errors == {"agreements": AGREEMENTS_MESSAGE}


class TestValidationResult:
    """Test ValidationResult helpers."""

    def test_first_error_per_field_wins(self):
        result = ValidationResult()
        result.add_error("supplier_name", "first")
        result.add_error("supplier_name", "second")
        assert result.errors == {"supplier_name": "first"}

    def test_to_dict(self):
        result = ValidationResult(warnings=["w"])
        assert result.to_dict() == {"is_valid": True, "errors": {}, "warnings": ["w"]}

    def test_form_validation_error_carries_result(self):
        result = validate_order_details(OrderDetails())
        error = FormValidationError(result)
        assert error.result is result
        assert "supplier_address" in str(error)
