"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from ordersync.core.models import Category, OrderItem
from ordersync.core.money import Money
from tests.fixtures.synthetic_data import make_order, make_transaction

# Tunables that a developer's .env could otherwise leak into tests
CONFIG_ENV_VARS = [
    "MATCH_AMOUNT_TOLERANCE_CENTS",
    "MATCH_DATE_TOLERANCE_DAYS",
    "ALLOCATION_CORRECTION_LIMIT_CENTS",
    "SPLIT_ROUNDING_WARN_CENTS",
    "SPLIT_REQUIRE_TWO_SPLITS",
    "TIP_CATEGORIES",
    "TIP_FALLBACK_CATEGORY",
    "CHARGE_TOLERANCE_CENTS",
    "DEBUG",
    "LOG_LEVEL",
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def categories() -> list[Category]:
    """Ledger categories used across the suite."""
    return [
        Category(id="cat-groceries", name="Groceries"),
        Category(id="cat-household", name="Household"),
        Category(id="cat-shopping", name="Shopping"),
        Category(id="cat-pets", name="Pets"),
    ]


@pytest.fixture
def order_factory():
    return make_order


@pytest.fixture
def transaction_factory():
    return make_transaction


@pytest.fixture
def sample_order_item() -> OrderItem:
    return OrderItem(name="Organic Bananas", price=Money.from_cents(299), quantity=1, category="Groceries")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("ORDERSYNC_ENV", "test")
    monkeypatch.setenv("ORDERSYNC_DATA_DIR", "/tmp/test_ordersync_data")

    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "matching: Tests for order to transaction matching")
    config.addinivalue_line("markers", "allocation: Tests for pro-rata cost allocation")
    config.addinivalue_line("markers", "splitting: Tests for categorization and category splits")
    config.addinivalue_line("markers", "validation: Tests for bank charge validation")
    config.addinivalue_line("markers", "reconcile: Tests for the reconciliation pass")
