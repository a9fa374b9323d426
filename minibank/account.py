"""
account.py - A single balance and its own append-only history.

Account is the only place a balance changes. deposit() and withdraw() are
its two mutators; transfers and undo are expressed by the Ledger as calls
to them, so the positive-amount and balance-floor checks live here once.
"""

from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from .core import (
    Transaction, TxKind, AccountPolicy,
    InvalidAmount, InsufficientFunds,
    ZERO, NOTE_INITIAL,
    checking, positive_amount, to_amount,
)


Clock = Callable[[], datetime]


class Account:
    """
    A bank account holding one balance.

    The balance is always equal to the signed sum of ``history`` and never
    below ``policy.floor``.

    Accounts are created by Ledger.create_account(); constructing one
    directly is reserved for the ledger and for tests.
    """

    def __init__(
        self,
        account_id: int,
        owner: str,
        initial_balance: Decimal = ZERO,
        policy: Optional[AccountPolicy] = None,
        clock: Clock = datetime.now,
    ):
        """
        Create an account.

        Args:
            account_id: Identifier assigned by the ledger
            owner: Display name, fixed for the life of the account
            initial_balance: Opening balance (>= 0), recorded as an "initial" deposit
            policy: Withdrawal policy (default: checking(), no overdraft)
            clock: Zero-argument callable giving record timestamps

        Raises:
            ValueError: If owner is blank
            InvalidAmount: If initial_balance is negative or not a number
        """
        if not owner or not owner.strip():
            raise ValueError("Account owner cannot be empty")
        opening = to_amount(initial_balance)
        if opening < ZERO:
            raise InvalidAmount(f"initial balance cannot be negative, got {opening}")

        self._id = account_id
        self._owner = owner.strip()
        self._policy = policy or checking()
        self._clock = clock
        self._balance = ZERO
        self._history: List[Transaction] = []

        if opening > ZERO:
            self._apply(self.record(TxKind.DEPOSIT, opening, NOTE_INITIAL))

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    @property
    def id(self) -> int:
        return self._id

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def policy(self) -> AccountPolicy:
        return self._policy

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def history(self) -> Tuple[Transaction, ...]:
        """Snapshot of this account's records, oldest first."""
        return tuple(self._history)

    def can_withdraw(self, amount: Decimal) -> bool:
        """
        Check whether withdraw(amount) would succeed, without mutating.

        Returns False for non-positive amounts as well as for amounts that
        would take the balance below the policy floor.
        """
        try:
            amount = positive_amount(amount)
        except InvalidAmount:
            return False
        return self._balance - amount >= self._policy.floor

    # ========================================================================
    # MUTATORS
    # ========================================================================

    def deposit(
        self,
        amount: Decimal,
        note: str = "",
        kind: TxKind = TxKind.DEPOSIT,
        transfer_id: Optional[str] = None,
    ) -> Transaction:
        """
        Add ``amount`` to the balance and record it.

        Args:
            amount: Amount to add (> 0)
            note: Free-text annotation stored on the record
            kind: DEPOSIT, or TRANSFER_IN when called for a transfer leg
            transfer_id: Correlation id for a transfer leg

        Returns:
            The Transaction appended to this account's history

        Raises:
            InvalidAmount: If amount is not positive
        """
        if not kind.increases:
            raise ValueError(f"deposit cannot record a {kind.name}")
        amount = positive_amount(amount, "deposit")
        tx = self.record(kind, amount, note, transfer_id)
        self._apply(tx)
        return tx

    def withdraw(
        self,
        amount: Decimal,
        note: str = "",
        kind: TxKind = TxKind.WITHDRAW,
        transfer_id: Optional[str] = None,
    ) -> Transaction:
        """
        Remove ``amount`` from the balance and record it.

        Args:
            amount: Amount to remove (> 0)
            note: Free-text annotation stored on the record
            kind: WITHDRAW, or TRANSFER_OUT when called for a transfer leg
            transfer_id: Correlation id for a transfer leg

        Returns:
            The Transaction appended to this account's history

        Raises:
            InvalidAmount: If amount is not positive
            InsufficientFunds: If the balance would fall below the policy floor
        """
        if kind.increases:
            raise ValueError(f"withdraw cannot record a {kind.name}")
        amount = positive_amount(amount, "withdraw")
        if self._balance - amount < self._policy.floor:
            raise InsufficientFunds(
                f"account {self._id}: balance {self._balance} < {amount}"
            )
        tx = self.record(kind, amount, note, transfer_id)
        self._apply(tx)
        return tx

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def record(
        self,
        kind: TxKind,
        amount: Decimal,
        note: str = "",
        transfer_id: Optional[str] = None,
    ) -> Transaction:
        """Build (but do not apply) a record for this account stamped with the clock."""
        return Transaction(
            account=self._id,
            kind=kind,
            amount=amount,
            note=note,
            timestamp=self._clock(),
            transfer_id=transfer_id,
        )

    def _apply(self, tx: Transaction) -> None:
        # Balance and history change together or not at all.
        self._balance = self._balance + tx.signed_amount
        self._history.append(tx)

    def history_total(self) -> Decimal:
        """Signed sum of the history; equals ``balance`` whenever the invariant holds."""
        return sum((tx.signed_amount for tx in self._history), ZERO)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, owner={self._owner!r}, balance={self._balance})"
