"""Session-scoped order number shared by the order and credit card forms."""

import logging

logger = logging.getLogger(__name__)


class SharedOrderNumber:
    """Order number owned by one ordering session.

    Created by OrderingSystem and passed to every component that reads or
    writes the number. There is no module-level instance.
    """

    def __init__(self, value: str = ""):
        self._value = value.strip()

    def get(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        value = (value or "").strip()
        if value != self._value:
            logger.debug("Order number changed from %r to %r", self._value, value)
        self._value = value

    def clear(self) -> None:
        self.set("")

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self.set(value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __repr__(self) -> str:
        return f"SharedOrderNumber({self._value!r})"
