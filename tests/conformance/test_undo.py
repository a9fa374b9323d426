"""
Undo Conformance Tests

INVARIANT: Undo is the inverse of the most recent logged operation.

    ∀ state S, operation op with S --op--> S':
        undo(S') restores every balance of S and the global log of S
        (account histories and the audit trail only grow)

Undo is one level deep: the compensating records it writes are never
themselves undone.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from decimal import Decimal

from minibank import NothingToUndo

from tests.helpers import apply, assert_invariants, new_bank, operation


class TestUndoProperties:
    """Property-based undo tests."""

    @given(st.lists(operation(), max_size=25), operation())
    @settings(max_examples=200)
    def test_undo_restores_state_before_last_operation(self, prefix, op):
        """
        PROPERTY: After a successful deposit, withdrawal or transfer, undo
        brings balances and the global log back to what they were.
        """
        bank = new_bank()
        for earlier in prefix:
            apply(bank, earlier)

        balances = {a.id: a.balance for a in bank.accounts.values()}
        log = bank.transaction_log
        if op[0] == "undo" or not apply(bank, op):
            return

        bank.undo()
        assert {a.id: a.balance for a in bank.accounts.values()} == balances
        assert bank.transaction_log == log
        assert_invariants(bank)

    @given(st.lists(operation(), max_size=25))
    @settings(max_examples=100)
    def test_undo_until_empty(self, ops):
        """
        PROPERTY: Undoing newest-first never hits an infeasible reversal and
        ends with every account at zero.
        """
        bank = new_bank()
        for op in ops:
            apply(bank, op)
        while bank.can_undo():
            bank.undo()
        with pytest.raises(NothingToUndo):
            bank.undo()
        assert all(a.balance == Decimal("0") for a in bank.accounts.values())
        assert_invariants(bank)

    @given(st.lists(operation(), max_size=25))
    @settings(max_examples=100)
    def test_histories_never_shrink(self, ops):
        """PROPERTY: No operation, undo included, removes a record from an account history."""
        bank = new_bank()
        lengths = {a.id: len(a.history) for a in bank.accounts.values()}
        for op in ops:
            apply(bank, op)
            for account in bank.accounts.values():
                assert len(account.history) >= lengths[account.id]
                lengths[account.id] = len(account.history)
