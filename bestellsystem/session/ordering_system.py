"""Top-level controller composing the three form tabs."""

import logging
from typing import Optional

from ..config import get_default_profile_name
from ..config.profile_loader import FormProfile, get_default_profile, load_profile
from .credit_card_form import CreditCardFormSession
from .order_form import OrderFormSession
from .order_number_generator import OrderNumberGeneratorSession
from .shared_order_number import SharedOrderNumber

logger = logging.getLogger(__name__)

TABS = ("order", "credit-card", "order-number")

TAB_LABELS = {
    "order": "Bestellung",
    "credit-card": "Virtuelle Kreditkarte",
    "order-number": "Auftragsnummer",
}


def _resolve_profile(profile_name: Optional[str]) -> FormProfile:
    name = profile_name or get_default_profile_name()
    if name == "default":
        return get_default_profile()
    return load_profile(name)


class OrderingSystem:
    """One user's ordering session: order form, credit card form and
    order number generator sharing a single order number.
    """

    def __init__(self, profile: Optional[FormProfile] = None, profile_name: Optional[str] = None):
        self.profile = profile or _resolve_profile(profile_name)
        self.order_number = SharedOrderNumber()
        self.order_form = OrderFormSession(self.order_number, self.profile)
        self.credit_card_form = CreditCardFormSession(self.order_number, self.profile)
        self.order_number_generator = OrderNumberGeneratorSession(
            self.order_number,
            contact_person=self.order_form.details.contact_person,
        )
        self._active_tab = TABS[0]
        logger.debug("Ordering session started with profile %r", self.profile.name)

    @property
    def active_tab(self) -> str:
        return self._active_tab

    @active_tab.setter
    def active_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab!r} (expected one of {TABS})")
        self._active_tab = tab

    def reset(self) -> None:
        """Start over: clear the order number and reset every form."""
        self.order_number.clear()
        self.order_form.load_profile(self.profile)
        self.credit_card_form.reset()
        self.order_number_generator.reset()
