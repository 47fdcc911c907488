"""
Atomicity Conformance Tests

INVARIANT: Operations are all-or-nothing.

    ∀ operation op:
        op rejected ⟹ transactions, categories and filter are unchanged
        op accepted ⟹ the full effect of op is visible

Partial application is impossible by construction: every check runs before
the first mutation.
"""

from datetime import date
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from expense_ledger import Ledger, Category, Transaction

from .strategies import operations, categories, transactions, apply, state_of


class TestAtomicityProperties:
    """Property-based atomicity tests."""

    @given(st.lists(operations, max_size=30), operations)
    @settings(max_examples=300)
    def test_rejection_leaves_state_unchanged(self, setup, op):
        """
        PROPERTY: A rejected operation leaves every observable unchanged.
        """
        ledger = Ledger(verbose=False)
        for s in setup:
            apply(ledger, s)

        before = state_of(ledger)
        if not apply(ledger, op):
            assert state_of(ledger) == before

    @given(st.lists(transactions(), max_size=20))
    @settings(max_examples=100)
    def test_sort_by_amount_is_idempotent(self, txs):
        """
        PROPERTY: Sorting twice with no mutation in between changes nothing.
        """
        ledger = Ledger(verbose=False)
        for c in ("Food", "Rent", "Travel"):
            ledger.add_category(Category(c))
        for t in txs:
            ledger.add_transaction(t)

        ledger.sort_transactions("amount")
        once = list(ledger._transactions)
        ledger.sort_transactions("amount")
        assert all(a is b for a, b in zip(once, ledger._transactions))

    @given(st.lists(transactions(), max_size=20))
    @settings(max_examples=100)
    def test_sort_is_stable_and_total(self, txs):
        """
        PROPERTY: Sorting by date then amount orders the whole sequence by
        amount, with equal amounts kept in date order.
        """
        ledger = Ledger(verbose=False)
        for c in ("Food", "Rent", "Travel"):
            ledger.add_category(Category(c))
        for t in txs:
            ledger.add_transaction(t)
        ledger.set_category_filter(Category("Food"))

        ledger.sort_transactions("date")
        by_date = list(ledger._transactions)
        ledger.sort_transactions("amount")

        result = ledger._transactions
        assert len(result) == len(txs)
        expected = sorted(by_date, key=lambda t: t.amount)
        assert all(a is b for a, b in zip(result, expected))

    @given(st.lists(transactions(), min_size=1, max_size=15), categories)
    @settings(max_examples=100)
    def test_referential_integrity(self, txs, category):
        """
        PROPERTY: delete_category succeeds iff no transaction uses the
        category (and it is not the last one).
        """
        ledger = Ledger(verbose=False)
        for c in ("Food", "Rent", "Travel"):
            ledger.add_category(Category(c))
        for t in txs:
            ledger.add_transaction(t)

        in_use = any(t.category == category for t in txs)
        before = state_of(ledger)
        assert ledger.delete_category(category) is (not in_use)
        if in_use:
            assert state_of(ledger) == before
        else:
            assert category not in ledger.get_categories()

    @given(st.lists(transactions(), max_size=15), categories, st.sampled_from(["Groceries", "Food"]))
    @settings(max_examples=100)
    def test_rename_propagation(self, txs, old, new_name):
        """
        PROPERTY: edit_category succeeds iff old exists and new does not;
        afterwards every former user of old reports new.
        """
        ledger = Ledger(verbose=False)
        for c in ("Food", "Rent", "Travel"):
            ledger.add_category(Category(c))
        for t in txs:
            ledger.add_transaction(t)

        new = Category(new_name)
        users = [t for t in ledger._transactions if t.category == old]
        should_succeed = not ledger.has_category(new)

        assert ledger.edit_category(old, new) is should_succeed
        if should_succeed:
            assert all(t.category is new for t in users)
            assert old not in ledger.get_categories()
            assert new in ledger.get_categories()


class TestAtomicityExamples:
    """Explicit atomicity examples."""

    def test_failed_edit_leaves_sequence(self):
        ledger = Ledger(verbose=False)
        general = Category("General")
        t = Transaction(Decimal("1"), date(2024, 1, 1), general, "x")
        ledger.add_transaction(t)
        before = state_of(ledger)

        bad = Transaction(Decimal("2"), date(2024, 1, 2), Category("Unknown"), "y")
        try:
            ledger.edit_transaction(0, bad)
        except ValueError:
            pass
        assert state_of(ledger) == before
        assert ledger.get_transactions()[0] is t
