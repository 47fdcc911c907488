#!/usr/bin/env python3
"""
demo.py - Walkthrough: Learn the Expense Ledger Step by Step

Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3: Foundation  - The default category, adding categories and transactions
  4-5: Integrity   - Blocked category deletion, renaming with propagation
  6-7: Views       - Filters, view rows vs sequence indices, sorting
  8:   Settings    - Currency symbol and theme through the ledger

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List
import sys

from expense_ledger import (
    Ledger, Settings, Category, Transaction, TransactionController,
    SORT_BY_AMOUNT, SORT_BY_DATE, THEME_DARK,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the walkthrough. Modify these to experiment."""
    currency_symbol: str = "€"
    food: str = "Food"
    groceries: str = "Groceries"
    rent: str = "Rent"
    rows: List[tuple] = field(default_factory=lambda: [
        (Decimal("12.50"), date(2024, 1, 5), "Food", "lunch"),
        (Decimal("950.00"), date(2024, 1, 1), "Rent", "January rent"),
        (Decimal("8.20"), date(2024, 1, 3), "Food", "coffee beans"),
        (Decimal("-40.00"), date(2024, 1, 4), "General", "refund"),
    ])


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def show_rows(ledger: Ledger):
    """Print the current view the way a table would show it."""
    for row, t in enumerate(ledger.get_transactions()):
        amount = ledger.settings.format_amount(t.amount)
        print(f"  [{row}] {t.date.isoformat()}  {amount:>12}  {t.category!s:<10} {t.description}")


def refresh_counter():
    """A listener that counts broadcasts, standing in for a table view."""
    calls = []

    def listener(ledger: Ledger):
        calls.append(ledger.transaction_count)

    return listener, calls


# ============================================================================
# STEPS
# ============================================================================

def step_01_empty_ledger():
    step_header(1, "The Empty Ledger",
        "A ledger starts with no transactions and one 'General' category.")

    settings = Settings()
    ledger = Ledger(settings, verbose=True)
    listener, calls = refresh_counter()
    controller = TransactionController(ledger, listener)

    print(f"Ledger:     {ledger!r}")
    print(f"Categories: {[c.name for c in ledger.get_categories()]}")
    print(f"Settings:   {settings!r}")
    return ledger, controller, calls


def step_02_categories(controller: TransactionController):
    step_header(2, "Categories",
        "Categories are unique by name; adding one twice is a no-op.")

    for name in (CONFIG.food, CONFIG.rent, CONFIG.food):
        controller.handle_action("add_category", Category(name))
    print(f"Categories: {[c.name for c in controller.ledger.get_categories()]}")


def step_03_transactions(controller: TransactionController, calls: List[int]):
    step_header(3, "Transactions",
        "Every transaction must use a category the ledger knows about.")

    for amount, when, cat, description in CONFIG.rows:
        controller.handle_action("add", Transaction(amount, when, Category(cat), description))
    show_rows(controller.ledger)
    print(f"\nListener refreshes so far: {len(calls)}")


def step_04_blocked_delete(controller: TransactionController):
    step_header(4, "Referential Integrity",
        "A category in use cannot be deleted; deletion never cascades.")

    ok = controller.handle_action("delete_category", Category(CONFIG.rent))
    print(f"delete_category(Rent) -> {ok}")


def step_05_rename(controller: TransactionController):
    step_header(5, "Renaming",
        "Renaming repoints every transaction; renaming onto an existing name fails.")

    ok = controller.handle_action("edit_category", (Category(CONFIG.food), Category("General")))
    print(f"edit_category(Food -> General) -> {ok}")
    ok = controller.handle_action("edit_category", (Category(CONFIG.food), Category(CONFIG.groceries)))
    print(f"edit_category(Food -> Groceries) -> {ok}")
    show_rows(controller.ledger)


def step_06_filter(controller: TransactionController):
    step_header(6, "Filtered Views",
        "Rows in a filtered view are translated to sequence indices before edits.")

    ledger = controller.ledger
    controller.handle_action("filter", Category(CONFIG.groceries))
    show_rows(ledger)
    print(f"\nView row 1 is sequence index {ledger.resolve_view_index(1)}")
    controller.handle_action("delete", 1)
    controller.handle_action("filter", None)
    show_rows(ledger)


def step_07_sort(controller: TransactionController):
    step_header(7, "Sorting",
        "Sorting is stable and always reorders the whole sequence.")

    controller.handle_action("sort", SORT_BY_AMOUNT)
    show_rows(controller.ledger)
    controller.handle_action("sort", SORT_BY_DATE)
    show_rows(controller.ledger)


def step_08_settings(controller: TransactionController, calls: List[int]):
    step_header(8, "Settings",
        "Display settings live in one shared object; the ledger broadcasts changes.")

    ledger = controller.ledger
    controller.handle_action("currency", CONFIG.currency_symbol)
    controller.handle_action("theme", THEME_DARK)
    print(f"Settings:   {ledger.settings!r}")
    print(f"Colors:     bg={ledger.settings.background_color} fg={ledger.settings.foreground_color}")
    show_rows(ledger)
    print(f"\nListener refreshes in total: {len(calls)}")
    print(f"Invariants: {ledger.verify_invariants()}")


def main():
    ledger, controller, calls = step_01_empty_ledger()
    wait_for_enter()
    step_02_categories(controller)
    wait_for_enter()
    step_03_transactions(controller, calls)
    wait_for_enter()
    step_04_blocked_delete(controller)
    wait_for_enter()
    step_05_rename(controller)
    wait_for_enter()
    step_06_filter(controller)
    wait_for_enter()
    step_07_sort(controller)
    wait_for_enter()
    step_08_settings(controller, calls)

    print("\n" + "=" * 70)
    print("       WALKTHROUGH COMPLETE!")
    print("=" * 70)


if __name__ == "__main__":
    main()
