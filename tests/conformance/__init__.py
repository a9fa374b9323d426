"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the minibank Ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_conservation.py - Balances equal their own history, never negative
2. test_atomicity.py - Rejected operations change nothing; transfers land as adjacent pairs
3. test_undo.py - Undo restores the state before the reversed operation

These tests use hypothesis for property-based testing.
"""
