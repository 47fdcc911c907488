"""
controller.py - Named action dispatch onto a Ledger

The presentation layer reports user actions as (action, data) pairs. The
controller maps each action to one Ledger operation, translating table rows
of the filtered view into sequence indices on the way.

Actions:
- "add":             data is a Transaction
- "edit":            data is (row, Transaction)
- "delete":          data is a row of the current view
- "sort":            data is "date" or "amount"
- "filter":          data is a Category or None
- "currency":        data is the currency symbol
- "theme":           data is "Light" or "Dark"
- "add_category":    data is a Category
- "edit_category":   data is (old, new); returns bool
- "delete_category": data is a Category; returns bool
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional

from .core import InvalidArgument, Listener
from .ledger import Ledger


class TransactionController:
    """
    Route user actions to the ledger.

    Errors raised by the ledger propagate unchanged so the view can decide
    how to show them.
    """

    def __init__(self, ledger: Ledger, listener: Optional[Listener] = None):
        """
        Initialize controller.

        Args:
            ledger: The ledger to operate on
            listener: Optional view callback, subscribed to the ledger

        Raises:
            InvalidArgument: If ledger is None
        """
        if ledger is None:
            raise InvalidArgument("Ledger cannot be null")
        self.ledger = ledger
        if listener is not None:
            ledger.subscribe(listener)

        self._actions: Dict[str, Callable[[Any], Any]] = {
            "add": self.ledger.add_transaction,
            "edit": self._edit,
            "delete": self._delete,
            "sort": self.ledger.sort_transactions,
            "filter": self.ledger.set_category_filter,
            "currency": self.ledger.set_currency_symbol,
            "theme": self.ledger.set_theme,
            "add_category": self.ledger.add_category,
            "edit_category": self._edit_category,
            "delete_category": self.ledger.delete_category,
        }

    @property
    def actions(self):
        """Names of the supported actions."""
        return sorted(self._actions)

    def handle_action(self, action: str, data: Any = None) -> Any:
        """
        Perform one user action.

        Args:
            action: Action name (see module docstring)
            data: Action argument

        Returns:
            The ledger's result: bool for edit_category/delete_category,
            None otherwise

        Raises:
            InvalidArgument: If action is None or unknown, or data is malformed
        """
        if action is None:
            raise InvalidArgument("Action cannot be null")
        handler = self._actions.get(action)
        if handler is None:
            raise InvalidArgument(f"Unknown action {action!r}")
        return handler(data)

    def _edit(self, data: Any) -> None:
        row, transaction = _pair(data, "edit")
        self.ledger.edit_transaction(self.ledger.resolve_view_index(row), transaction)

    def _delete(self, row: Any) -> None:
        self.ledger.delete_transaction(self.ledger.resolve_view_index(row))

    def _edit_category(self, data: Any) -> bool:
        old, new = _pair(data, "edit_category")
        return self.ledger.edit_category(old, new)


def _pair(data: Any, action: str):
    if not isinstance(data, (tuple, list)) or len(data) != 2:
        raise InvalidArgument(f"Action {action!r} expects a pair, got {data!r}")
    return data[0], data[1]
