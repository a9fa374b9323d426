"""
test_display.py - Unit tests for text rendering

Rendering functions only need a LedgerView, so most tests use FakeView.
"""

import pytest
from datetime import datetime
from decimal import Decimal

from minibank import (
    Transaction, TxKind, AccountNotFound,
    format_money, format_transaction, format_account, format_account_list,
)

from tests.fake_view import FakeView


T0 = datetime(2025, 3, 4, 5, 6, 7)


class TestFormatTransaction:

    @pytest.mark.parametrize("kind,label", [
        (TxKind.DEPOSIT, "Dep +"),
        (TxKind.WITHDRAW, "Wdr -"),
        (TxKind.TRANSFER_IN, "TIn +"),
        (TxKind.TRANSFER_OUT, "TOut -"),
    ])
    def test_labels(self, kind, label):
        transfer_id = "x" if kind.is_transfer else None
        tx = Transaction(1, kind, Decimal("40"), "note", T0, transfer_id)
        assert format_transaction(tx) == f"[2025-03-04 05:06:07] {label} 40.00 | note"

    def test_money_has_two_decimals(self):
        assert format_money(Decimal("3")) == "3.00"
        assert format_money(Decimal("3.5")) == "3.50"

    def test_money_rounds_half_even_for_display_only(self):
        assert format_money(Decimal("1.005")) == "1.00"
        assert format_money(Decimal("1.015")) == "1.02"
        assert format_money(Decimal("0.004")) == "0.00"


class TestFormatAccount:

    def test_header_and_history(self):
        tx = Transaction(1, TxKind.DEPOSIT, Decimal("100"), "initial", T0)
        view = FakeView(owners={1: "Alice"}, balances={1: Decimal("100")}, histories={1: [tx]})
        assert format_account(view, 1) == (
            "Account 1 (Alice) balance=100.00\n"
            "  [2025-03-04 05:06:07] Dep + 100.00 | initial"
        )

    def test_empty_history(self):
        view = FakeView(owners={2: "Bob"}, balances={2: Decimal("0")})
        assert format_account(view, 2) == "Account 2 (Bob) balance=0.00"

    def test_unknown_account_raises(self):
        view = FakeView(owners={}, balances={})
        with pytest.raises(AccountNotFound):
            format_account(view, 7)


class TestFormatAccountList:

    def test_list(self):
        view = FakeView(owners={2: "Bob", 1: "Alice"}, balances={1: Decimal("60"), 2: Decimal("40")})
        assert format_account_list(view) == (
            "Accounts:\n"
            " id=1 owner=Alice bal=60.00\n"
            " id=2 owner=Bob bal=40.00"
        )

    def test_empty_list(self):
        assert format_account_list(FakeView(owners={}, balances={})) == "Accounts:"

    def test_works_on_real_ledger(self, alice_bob_bank):
        alice_bob_bank.transfer(1, 2, Decimal("40"))
        text = format_account_list(alice_bob_bank)
        assert "id=1 owner=Alice bal=60.00" in text
        assert "id=2 owner=Bob bal=40.00" in text
