"""
ledger.py - Stateful Transaction and Category Store

The Ledger class is the central state manager for the expense tracker.
It is the only module that mutates transaction and category state, ensuring
controlled and observable changes.

Key responsibilities:
    - Owns the ordered transaction sequence and the category set
    - Enforces cross-entity invariants after every mutation
    - Provides filtered and sorted views for the presentation layer
    - Broadcasts a change notification after each successful mutation
    - Forwards display settings changes to the shared Settings object

Invariants (hold after every public operation):
    I1. Every transaction's category is in the category set.
    I2. The current filter, if set, is in the category set.
    I3. The category set is never empty.
    I4. Category names are unique.
"""

from __future__ import annotations
from operator import attrgetter
from typing import Any, Dict, List, Optional

from .core import (
    # Types
    Category, Transaction, Listener,
    # Constants
    DEFAULT_CATEGORY_NAME, SORT_BY_DATE, SORT_BY_AMOUNT, SORT_KEYS,
    # Exceptions
    LedgerError, InvalidArgument, IndexOutOfRange,
)
from .settings import Settings


class Ledger:
    """
    In-memory store of transactions and categories with change notification.

    Every operation either fully applies or fails before touching state.
    Precondition violations raise InvalidArgument or IndexOutOfRange; the
    routine category rejections (name collision, category still in use)
    return False instead. Listeners are only notified after a successful
    mutation and the invariant check that follows it.

    Thread Safety:
        Not thread-safe. All access to one Ledger must be serialized by the
        caller (for example, by keeping it on the UI thread).

    Example:
        ledger = Ledger(verbose=False)
        food = Category("Food")
        ledger.add_category(food)
        ledger.add_transaction(Transaction(Decimal("12.50"), date(2024, 1, 5), food, "lunch"))
        ledger.subscribe(lambda l: print(l.get_transactions()))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        verbose: bool = True,
        default_category: str = DEFAULT_CATEGORY_NAME,
    ):
        """
        Create a ledger.

        Args:
            settings: Shared display settings (default: a new Settings())
            verbose: Print a line for each change (default: True)
            default_category: Name of the category the ledger starts with

        Raises:
            InvalidArgument: If default_category is empty
        """
        self.settings = settings if settings is not None else Settings()
        self.verbose = verbose
        self._transactions: List[Transaction] = []
        # Keyed by name; dict order is the category display order.
        self._categories: Dict[str, Category] = {}
        self._current_filter: Optional[Category] = None
        self._listeners: List[Listener] = []

        initial = Category(default_category)
        self._categories[initial.name] = initial

    # ========================================================================
    # QUERIES (read-only)
    # ========================================================================

    @property
    def current_filter(self) -> Optional[Category]:
        """The category get_transactions() is restricted to, or None."""
        return self._current_filter

    @property
    def transaction_count(self) -> int:
        """Number of transactions in the unfiltered sequence."""
        return len(self._transactions)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_transactions(self) -> List[Transaction]:
        """
        Get the transactions in sequence order, applying the current filter.

        Returns:
            A new list. Only transactions in the current filter's category
            are included when a filter is set, in their relative order.
        """
        if self._current_filter is None:
            return list(self._transactions)
        return [t for t in self._transactions if t.category == self._current_filter]

    def get_categories(self) -> List[Category]:
        """Get a new list of all categories in insertion order."""
        return list(self._categories.values())

    def has_category(self, category: Any) -> bool:
        """Check if a category (by name) is in the category set."""
        return isinstance(category, Category) and category.name in self._categories

    def filter_by_category(self, category: Category) -> List[Transaction]:
        """
        Get all transactions in a category, ignoring the current filter.

        Args:
            category: Category to match

        Returns:
            A new list of matching transactions in sequence order

        Raises:
            InvalidArgument: If category is None or not a Category
        """
        if category is None:
            raise InvalidArgument("Category cannot be null")
        if not isinstance(category, Category):
            raise InvalidArgument(f"Expected a Category, got {type(category).__name__}")
        return [t for t in self._transactions if t.category == category]

    def resolve_view_index(self, row: int) -> int:
        """
        Translate a row of the filtered view into a sequence index.

        Rows shown to the user come from get_transactions(), which skips
        transactions outside the current filter. edit_transaction() and
        delete_transaction() address the unfiltered sequence, so a view row
        must be translated first.

        Args:
            row: Position in the list returned by get_transactions()

        Returns:
            Index of the same transaction in the unfiltered sequence

        Raises:
            InvalidArgument: If row is not an int
            IndexOutOfRange: If row is outside the current view
        """
        if self._current_filter is None:
            self._check_index(row, len(self._transactions))
            return row
        visible = [
            i for i, t in enumerate(self._transactions)
            if t.category == self._current_filter
        ]
        self._check_index(row, len(visible))
        return visible[row]

    def verify_invariants(self) -> Dict[str, Any]:
        """
        Check the ledger invariants without raising.

        Returns:
            Dict with keys:
            - 'valid': bool - True if every invariant holds
            - 'violations': List[str] - One message per broken invariant
        """
        violations = []

        for i, t in enumerate(self._transactions):
            if not isinstance(t, Transaction):
                violations.append(f"transaction {i} is not a Transaction")
            elif not self.has_category(t.category):
                violations.append(f"transaction {i} uses unknown category {t.category}")

        if self._current_filter is not None and not self.has_category(self._current_filter):
            violations.append(f"filter {self._current_filter} is not a known category")

        if not self._categories:
            violations.append("category set is empty")

        for name, category in self._categories.items():
            if category.name != name:
                violations.append(f"category {category} stored under name {name!r}")

        return {
            'valid': len(violations) == 0,
            'violations': violations,
        }

    # ========================================================================
    # LISTENERS
    # ========================================================================

    def subscribe(self, listener: Listener) -> None:
        """
        Register a listener to be called with this ledger after each change.

        Subscribing a listener that is already registered does nothing.

        Raises:
            InvalidArgument: If listener is not callable
        """
        if not callable(listener):
            raise InvalidArgument(f"Listener must be callable, got {listener!r}")
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        # Copy so listeners may (un)subscribe while being called.
        for listener in list(self._listeners):
            listener(self)

    def _commit(self, message: str) -> None:
        """Check invariants, log, and broadcast after a mutation."""
        self._check_rep()
        if self.verbose:
            print(f"✓ {message}")
        self._notify()

    def _reject(self, reason: str) -> bool:
        if self.verbose:
            print(f"✗ REJECTED: {reason}")
        return False

    def _check_rep(self) -> None:
        result = self.verify_invariants()
        if not result['valid']:
            raise LedgerError(f"Ledger invariant violated: {'; '.join(result['violations'])}")

    def _require_consistent(self) -> None:
        # Stored transactions are shared with callers, who may have
        # repointed one to an unknown category since the last operation.
        result = self.verify_invariants()
        if not result['valid']:
            raise InvalidArgument(
                f"Ledger invariant violated: {'; '.join(result['violations'])}"
            )

    # ========================================================================
    # VALIDATION HELPERS
    # ========================================================================

    @staticmethod
    def _check_index(index: Any, length: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgument(f"Index must be an int, got {index!r}")
        if not 0 <= index < length:
            raise IndexOutOfRange(f"Index {index} out of range [0, {length})")

    def _check_transaction(self, transaction: Any) -> None:
        if transaction is None:
            raise InvalidArgument("Transaction cannot be null")
        if not isinstance(transaction, Transaction):
            raise InvalidArgument(f"Expected a Transaction, got {type(transaction).__name__}")
        if not self.has_category(transaction.category):
            raise InvalidArgument(
                f"Transaction category {transaction.category} is not a known category"
            )

    # ========================================================================
    # TRANSACTIONS (Mutating)
    # ========================================================================

    def add_transaction(self, transaction: Transaction) -> None:
        """
        Append a transaction to the end of the sequence.

        Raises:
            InvalidArgument: If transaction is None or its category is unknown
        """
        self._require_consistent()
        self._check_transaction(transaction)
        self._transactions.append(transaction)
        self._commit(f"added: {transaction}")

    def edit_transaction(self, index: int, transaction: Transaction) -> None:
        """
        Replace the transaction at index, keeping every other position.

        Args:
            index: Position in the unfiltered sequence
            transaction: Replacement transaction

        Raises:
            IndexOutOfRange: If index is not in [0, transaction_count)
            InvalidArgument: If transaction is None or its category is unknown
        """
        self._require_consistent()
        self._check_index(index, len(self._transactions))
        self._check_transaction(transaction)
        self._transactions[index] = transaction
        self._commit(f"edited [{index}]: {transaction}")

    def delete_transaction(self, index: int) -> None:
        """
        Remove the transaction at index; later transactions shift down by one.

        Raises:
            IndexOutOfRange: If index is not in [0, transaction_count)
        """
        self._require_consistent()
        self._check_index(index, len(self._transactions))
        removed = self._transactions.pop(index)
        self._commit(f"deleted [{index}]: {removed}")

    def sort_transactions(self, key: str) -> None:
        """
        Stable ascending sort of the whole sequence by date or amount.

        The current filter does not restrict what is sorted. Transactions
        with equal keys keep their previous relative order.

        Args:
            key: "date" or "amount"

        Raises:
            InvalidArgument: For any other key
        """
        self._require_consistent()
        if key not in SORT_KEYS:
            raise InvalidArgument(f"Sort field must be one of {SORT_KEYS}, got {key!r}")
        if key == SORT_BY_DATE:
            self._transactions.sort(key=attrgetter('date'))
        elif key == SORT_BY_AMOUNT:
            self._transactions.sort(key=attrgetter('amount'))
        self._commit(f"sorted by {key}")

    # ========================================================================
    # CATEGORIES (Mutating)
    # ========================================================================

    def add_category(self, category: Category) -> None:
        """
        Add a category. Adding a category that already exists does nothing
        and sends no notification.

        Raises:
            InvalidArgument: If category is None or not a Category
        """
        self._require_consistent()
        if category is None:
            raise InvalidArgument("Category cannot be null")
        if not isinstance(category, Category):
            raise InvalidArgument(f"Expected a Category, got {type(category).__name__}")
        if category.name in self._categories:
            return
        self._categories[category.name] = category
        self._commit(f"category added: {category}")

    def edit_category(self, old: Category, new: Category) -> bool:
        """
        Rename a category.

        Every transaction filed under old is repointed to new in place, old
        is replaced by new in the category set, and a filter on old moves
        to new.

        Args:
            old: Existing category
            new: Replacement category, must not already exist

        Returns:
            True if renamed; False (with no change) if either argument is
            None, old is unknown, or new already exists
        """
        self._require_consistent()
        if old is None or new is None:
            return self._reject("category rename needs both old and new")
        if not self.has_category(old):
            return self._reject(f"category {old} does not exist")
        if not isinstance(new, Category):
            return self._reject(f"expected a Category, got {type(new).__name__}")
        if self.has_category(new):
            return self._reject(f"category {new} already exists")

        for t in self._transactions:
            if t.category == old:
                t.category = new
        del self._categories[old.name]
        self._categories[new.name] = new
        if self._current_filter == old:
            self._current_filter = new
        self._commit(f"category renamed: {old} -> {new}")
        return True

    def delete_category(self, category: Category) -> bool:
        """
        Delete a category that no transaction uses.

        Deletion never cascades: while any transaction is filed under the
        category it is refused. The last remaining category cannot be
        deleted. A filter on the deleted category is cleared. Deleting a
        category that is not in the set changes nothing and sends no
        notification, but still succeeds.

        Returns:
            True if deleted or absent; False (with no change) if category
            is None, in use, or the last category
        """
        self._require_consistent()
        if category is None:
            return self._reject("category cannot be null")
        if not self.has_category(category):
            return True
        if any(t.category == category for t in self._transactions):
            return self._reject(f"category {category} is used by transactions")
        if len(self._categories) == 1:
            return self._reject(f"category {category} is the last category")

        del self._categories[category.name]
        if self._current_filter == category:
            self._current_filter = None
        self._commit(f"category deleted: {category}")
        return True

    def set_category_filter(self, category: Optional[Category]) -> None:
        """
        Restrict get_transactions() to one category, or clear with None.

        Filtering never removes or changes transactions.

        Raises:
            InvalidArgument: If category is not None and not a known category
        """
        self._require_consistent()
        if category is not None and not self.has_category(category):
            raise InvalidArgument(f"Category {category} must exist in categories")
        self._current_filter = category
        self._commit(f"filter set: {category if category is not None else 'none'}")

    # ========================================================================
    # SETTINGS (Mutating)
    # ========================================================================

    def set_currency_symbol(self, symbol: str) -> None:
        """
        Set the shared currency symbol and notify listeners.

        Raises:
            InvalidArgument: If symbol is empty or not a string
        """
        self._require_consistent()
        self.settings.set_currency_symbol(symbol)
        self._commit(f"currency symbol set: {symbol}")

    def set_theme(self, theme: str) -> None:
        """
        Set the shared theme and notify listeners.

        Raises:
            InvalidArgument: If theme is not "Light" or "Dark"
        """
        self._require_consistent()
        self.settings.set_theme(theme)
        self._commit(f"theme set: {theme}")

    # ========================================================================
    # COPYING
    # ========================================================================

    def clone(self) -> Ledger:
        """
        Create an independent copy of this ledger.

        Transactions are copied; categories are immutable and shared. The
        clone uses the same Settings object and starts with no listeners.

        Returns:
            A new Ledger with identical transactions, categories and filter
        """
        cloned = Ledger.__new__(Ledger)
        cloned.settings = self.settings
        cloned.verbose = self.verbose
        cloned._transactions = [t.copy() for t in self._transactions]
        cloned._categories = dict(self._categories)
        cloned._current_filter = self._current_filter
        cloned._listeners = []
        return cloned

    def __repr__(self):
        filter_str = f", filter={self._current_filter}" if self._current_filter is not None else ""
        return (
            f"Ledger({len(self._transactions)} transactions, "
            f"{len(self._categories)} categories{filter_str})"
        )
