"""
expense_ledger - Personal Finance Record Keeper

An in-memory store of transactions and user-defined categories with
filtered/sorted views and change notification for a presentation layer.

Usage:
    from datetime import date
    from decimal import Decimal
    from expense_ledger import Ledger, Settings, Category, Transaction

    settings = Settings()
    ledger = Ledger(settings)
    ledger.subscribe(lambda l: print(len(l.get_transactions())))

    food = Category("Food")
    ledger.add_category(food)
    ledger.add_transaction(Transaction(Decimal("12.50"), date(2024, 1, 5), food, "lunch"))

    ledger.sort_transactions("amount")
    ledger.set_category_filter(food)
    rows = ledger.get_transactions()
"""

# Core types
from .core import (
    Category,
    Transaction,
    Listener,
    LedgerError,
    InvalidArgument,
    IndexOutOfRange,
    to_amount,
    DEFAULT_CATEGORY_NAME,
    DEFAULT_CURRENCY_SYMBOL,
    SORT_BY_DATE,
    SORT_BY_AMOUNT,
    SORT_KEYS,
    THEME_LIGHT,
    THEME_DARK,
    THEMES,
)

# Settings
from .settings import Settings, Color, THEME_COLORS

# Ledger
from .ledger import Ledger

# Controller
from .controller import TransactionController

__all__ = [
    # Core
    'Category', 'Transaction', 'Listener', 'to_amount',
    'LedgerError', 'InvalidArgument', 'IndexOutOfRange',
    'DEFAULT_CATEGORY_NAME', 'DEFAULT_CURRENCY_SYMBOL',
    'SORT_BY_DATE', 'SORT_BY_AMOUNT', 'SORT_KEYS',
    'THEME_LIGHT', 'THEME_DARK', 'THEMES',
    # Settings
    'Settings', 'Color', 'THEME_COLORS',
    # Ledger
    'Ledger',
    # Controller
    'TransactionController',
]

__version__ = '1.0.0'
