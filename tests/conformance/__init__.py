"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the expense ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. invariants.py - Category/transaction consistency (I1-I4) and broadcasts
2. atomicity.py - All-or-nothing operations, sorting, integrity, renames

These tests use hypothesis for property-based testing.
"""
