"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from bestellsystem.config.category_loader import get_expense_categories, get_expense_category_map
from bestellsystem.config.profile_loader import load_profile

FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test with default settings and fresh reference data caches."""
    for name in (
        "BESTELLSYSTEM_CONFIG_DIR",
        "BESTELLSYSTEM_DEPARTMENT",
        "BESTELLSYSTEM_TAX_RATE",
        "BESTELLSYSTEM_PROFILE",
        "BESTELLSYSTEM_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_expense_categories.cache_clear()
    get_expense_category_map.cache_clear()
    yield
    get_expense_categories.cache_clear()
    get_expense_category_map.cache_clear()


@pytest.fixture
def sample_profile():
    """The Völkner Elektronik sample order."""
    return load_profile("sample")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
