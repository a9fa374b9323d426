"""
fake_view.py - Test Helper for LedgerView

Provides a minimal LedgerView implementation for testing rendering code
without requiring a full Ledger instance.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from minibank import AccountNotFound, AccountSummary, Transaction


class FakeView:
    """
    Minimal read-only LedgerView for testing.

    Example:
        view = FakeView(
            owners={1: 'Alice'},
            balances={1: Decimal('100')},
            histories={1: [tx]},
        )
        view.get_balance(1)
        # Returns: Decimal('100')
    """

    def __init__(
        self,
        owners: Dict[int, str],
        balances: Dict[int, Decimal],
        histories: Optional[Dict[int, Sequence[Transaction]]] = None,
    ):
        self._owners = owners
        self._balances = balances
        self._histories = histories or {}

    def _check(self, account_id: int) -> None:
        if account_id not in self._owners:
            raise AccountNotFound(f"no account {account_id!r}")

    def list_accounts(self) -> List[AccountSummary]:
        return [
            AccountSummary(id=i, owner=self._owners[i], balance=self._balances.get(i, Decimal("0")))
            for i in sorted(self._owners)
        ]

    def get_balance(self, account_id: int) -> Decimal:
        self._check(account_id)
        return self._balances.get(account_id, Decimal("0"))

    def get_owner(self, account_id: int) -> str:
        self._check(account_id)
        return self._owners[account_id]

    def get_history(self, account_id: int) -> Tuple[Transaction, ...]:
        self._check(account_id)
        return tuple(self._histories.get(account_id, ()))
