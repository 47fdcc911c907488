"""
conftest.py - Shared pytest fixtures for expense ledger tests

Provides common fixtures used across unit, functional and conformance tests:
- Ledgers (empty, with categories, populated)
- Categories and a transaction factory
- A recording listener for asserting on broadcasts
"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Any, List

from expense_ledger import (
    Ledger, Settings, Category, Transaction,
    DEFAULT_CATEGORY_NAME,
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def make_transaction(
    amount="10",
    when: date = date(2024, 1, 1),
    category: Any = DEFAULT_CATEGORY_NAME,
    description: str = "",
) -> Transaction:
    """Create a transaction, accepting a category name for brevity."""
    if isinstance(category, str):
        category = Category(category)
    return Transaction(Decimal(str(amount)), when, category, description)


class Recorder:
    """Listener that records every broadcast it receives."""

    def __init__(self):
        self.calls: List[Ledger] = []

    def __call__(self, ledger: Ledger) -> None:
        self.calls.append(ledger)

    @property
    def count(self) -> int:
        return len(self.calls)


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Default settings ($, Light)."""
    return Settings()


@pytest.fixture
def empty_ledger(settings):
    """Fresh ledger with only the default category."""
    return Ledger(settings, verbose=False)


@pytest.fixture
def general():
    return Category(DEFAULT_CATEGORY_NAME)


@pytest.fixture
def food():
    return Category("Food")


@pytest.fixture
def rent():
    return Category("Rent")


@pytest.fixture
def category_ledger(empty_ledger, food, rent):
    """Ledger with General, Food and Rent."""
    empty_ledger.add_category(food)
    empty_ledger.add_category(rent)
    return empty_ledger


@pytest.fixture
def populated_ledger(category_ledger):
    """
    Ledger with four transactions in insertion order:

        [0] 12.50  2024-01-05  Food     lunch
        [1] 950    2024-01-01  Rent     rent
        [2] 8.20   2024-01-03  Food     coffee
        [3] -40    2024-01-04  General  refund
    """
    category_ledger.add_transaction(make_transaction("12.50", date(2024, 1, 5), "Food", "lunch"))
    category_ledger.add_transaction(make_transaction("950", date(2024, 1, 1), "Rent", "rent"))
    category_ledger.add_transaction(make_transaction("8.20", date(2024, 1, 3), "Food", "coffee"))
    category_ledger.add_transaction(make_transaction("-40", date(2024, 1, 4), "General", "refund"))
    return category_ledger


@pytest.fixture
def recorder():
    """Fresh recording listener (not yet subscribed)."""
    return Recorder()


@pytest.fixture
def make_tx():
    """Factory fixture wrapping make_transaction."""
    return make_transaction

