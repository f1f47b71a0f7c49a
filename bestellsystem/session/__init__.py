"""Per-user form state."""

from .credit_card_form import CreditCardFormSession
from .order_form import OrderFormSession
from .order_number_generator import OrderNumberGeneratorSession
from .ordering_system import TABS, OrderingSystem
from .shared_order_number import SharedOrderNumber

__all__ = [
    "CreditCardFormSession",
    "OrderFormSession",
    "OrderNumberGeneratorSession",
    "OrderingSystem",
    "SharedOrderNumber",
    "TABS",
]
