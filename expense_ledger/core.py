"""
Core types and validation helpers for the expense ledger.

This module provides the foundational data structures for the ledger:
1. Constants: sort keys, themes, the default category name
2. Exceptions: LedgerError and the argument/index error types
3. Category: immutable named bucket for transactions
4. Transaction: mutable record with per-field validation
5. Listener: the callback type the Ledger broadcasts to

Nothing in this module knows which categories exist. Membership checks
belong to the Ledger, which owns the category set.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import math
from typing import Any, Callable, Dict


# ============================================================================
# CONSTANTS
# ============================================================================

# Category every new ledger starts with.
DEFAULT_CATEGORY_NAME = "General"

# Sort keys (strings, not enum, matching what the presentation layer sends).
SORT_BY_DATE = "date"
SORT_BY_AMOUNT = "amount"
SORT_KEYS = (SORT_BY_DATE, SORT_BY_AMOUNT)

# Display themes.
THEME_LIGHT = "Light"
THEME_DARK = "Dark"
THEMES = (THEME_LIGHT, THEME_DARK)

DEFAULT_CURRENCY_SYMBOL = "$"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class InvalidArgument(LedgerError, ValueError):
    """Raised when a single input value violates a precondition."""
    pass


class IndexOutOfRange(LedgerError, IndexError):
    """Raised when an index-addressed operation is given an index outside [0, length)."""
    pass


# ============================================================================
# CATEGORY
# ============================================================================

@dataclass(frozen=True, slots=True)
class Category:
    """
    A named bucket that transactions belong to.

    Attributes:
        name: Non-empty name, stored with surrounding whitespace stripped.

    Categories are immutable (frozen=True). Equality and hashing use the
    name only and are case-sensitive, so the Ledger can use the name as the
    uniqueness key of its category set.
    """
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgument("Category name cannot be null or empty")
        object.__setattr__(self, 'name', self.name.strip())

    def __str__(self) -> str:
        return self.name


# ============================================================================
# FIELD VALIDATION
# ============================================================================

def to_amount(value: Any) -> Decimal:
    """
    Convert a numeric value to a Decimal amount.

    Floats go through str() so that 12.5 becomes Decimal("12.5") rather than
    its binary expansion.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        The amount as a Decimal.

    Raises:
        InvalidArgument: If the value is None, a bool, non-numeric or NaN.
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"Amount must be a number, got {value!r}")
    if isinstance(value, float) and math.isnan(value):
        raise InvalidArgument("Amount cannot be NaN")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise InvalidArgument(f"Amount must be a number, got {value!r}") from None
    else:
        raise InvalidArgument(f"Amount must be a number, got {type(value).__name__}")
    if amount.is_nan():
        raise InvalidArgument("Amount cannot be NaN")
    return amount


def _check_date(value: Any) -> date:
    # datetime is a subclass of date; a time-of-day is not allowed here.
    if not isinstance(value, date) or isinstance(value, datetime):
        raise InvalidArgument(f"Date must be a calendar date, got {value!r}")
    return value


def _check_category(value: Any) -> Category:
    if not isinstance(value, Category):
        raise InvalidArgument(f"Category must be a Category, got {value!r}")
    return value


def _check_description(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgument(f"Description must be a string, got {value!r}")
    return value


_FIELD_CHECKS: Dict[str, Callable[[Any], Any]] = {
    'amount': to_amount,
    'date': _check_date,
    'category': _check_category,
    'description': _check_description,
}


# ============================================================================
# TRANSACTION
# ============================================================================

@dataclass(eq=True)
class Transaction:
    """
    One financial event: an amount on a date, in a category.

    Attributes:
        amount: Signed amount as a Decimal (never NaN).
        date: Calendar date without time-of-day.
        category: The Category this transaction is filed under.
        description: Free text, may be empty.

    Transactions are mutable. Every assignment, including the ones made by
    __init__, runs the same per-field check and raises InvalidArgument on a
    bad value, leaving the previous value in place. Equality compares all four
    fields exactly. Mutable records are not hashable.

    Whether the category exists is not checked here; only the Ledger knows
    the valid category set.
    """
    amount: Decimal
    date: date
    category: Category
    description: str

    def __setattr__(self, name: str, value: Any) -> None:
        check = _FIELD_CHECKS.get(name)
        if check is not None:
            value = check(value)
        object.__setattr__(self, name, value)

    def copy(self) -> Transaction:
        """Return an independent record with the same field values."""
        return Transaction(self.amount, self.date, self.category, self.description)

    def __str__(self) -> str:
        return (
            f"{self.description}: ${self.amount:.2f} "
            f"on {self.date.isoformat()} ({self.category})"
        )


# ============================================================================
# LISTENERS
# ============================================================================

# Called with the Ledger after each successful mutation. The listener
# re-reads whatever queries it needs; no payload is sent.
Listener = Callable[[Any], None]
