"""
ledger.py - Stateful bank ledger with a global log and one-step undo

The Ledger class is the central state manager for minibank. Accounts change
balance only through Account.deposit/withdraw; the Ledger decides which
accounts to call, in what order, and what to record.

Key responsibilities:
    - Owns every Account and allocates their ids (1, 2, 3, ... never reused)
    - Mirrors each applied mutation into the global transaction log
    - Runs transfers as withdraw(source) then deposit(destination)
    - Undoes the most recent log entry, or the most recent transfer pair
    - Keeps a strictly append-only audit trail next to the undoable log
"""

from __future__ import annotations
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Tuple

from .account import Account
from .core import (
    # Types
    Transaction, TxKind, AccountPolicy, AccountSummary, UndoResult,
    # Constants
    FIRST_ACCOUNT_ID, NOTE_MANUAL, NOTE_UNDO, NOTE_UNDO_TRANSFER, ZERO,
    # Exceptions
    LedgerError, InsufficientFunds, AccountNotFound, SameAccount,
    NothingToUndo, LedgerInconsistency,
    # Helper functions
    positive_amount,
)


def _reported(func):
    """
    Print the outcome of a mutating Ledger method when verbose is on.

    LedgerErrors are re-raised unchanged after the REJECTED line.
    """
    @wraps(func)
    def wrapper(self: Ledger, *args, **kwargs):
        try:
            result = func(self, *args, **kwargs)
        except LedgerError as e:
            if self.verbose:
                print(f"✗ REJECTED: {func.__name__}: {e}")
            raise
        if self.verbose:
            print(f"✓ APPLIED: {func.__name__}{args!r}")
        return result

    return wrapper


class Ledger:
    """
    Single-process bank: accounts, a global transaction log and undo.

    Implements the LedgerView protocol, so it can be handed to rendering
    code that only reads.

    Two logs are kept:
        - transaction_log: every applied, not-yet-undone record in order.
          undo() reads its tail and pops what it reverses.
        - audit_trail: every record ever applied, including the
          compensating records written by undo(). Never shrinks.

    Thread Safety:
        Not thread-safe. A transfer's two legs and undo's
        read-reverse-pop sequence assume nothing runs in between.

    Example:
        bank = Ledger("main")
        alice = bank.create_account("Alice", Decimal("100"))
        bob = bank.create_account("Bob")
        bank.transfer(alice, bob, Decimal("40"))
        bank.undo()
    """

    def __init__(
        self,
        name: str = "bank",
        clock: Optional[Callable[[], datetime]] = None,
        verbose: bool = True,
    ):
        """
        Create an empty ledger.

        Args:
            name: Ledger identifier, used in transfer ids
            clock: Zero-argument callable returning the record timestamp
                   (default: datetime.now)
            verbose: Print a line per applied or rejected operation (default: True)
        """
        self.name = name
        self.verbose = verbose
        self._clock = clock or datetime.now
        self.accounts: Dict[int, Account] = {}
        self._log: List[Transaction] = []
        self.audit_trail: List[Transaction] = []
        self._next_id: int = FIRST_ACCOUNT_ID
        # Monotonic counter for transfer correlation ids
        self._next_transfer: int = 0

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def list_accounts(self) -> List[AccountSummary]:
        """List every account as (id, owner, balance), ordered by id."""
        return [
            AccountSummary(id=acc.id, owner=acc.owner, balance=acc.balance)
            for _, acc in sorted(self.accounts.items())
        ]

    def get_account(self, account_id: int) -> Account:
        """
        Look up an account.

        Args:
            account_id: Account identifier

        Returns:
            The Account (id, owner, balance, history)

        Raises:
            AccountNotFound: If no account has this id
        """
        try:
            return self.accounts[account_id]
        except (KeyError, TypeError):
            raise AccountNotFound(f"no account {account_id!r}") from None

    def get_balance(self, account_id: int) -> Decimal:
        return self.get_account(account_id).balance

    def get_owner(self, account_id: int) -> str:
        return self.get_account(account_id).owner

    def get_history(self, account_id: int) -> Tuple[Transaction, ...]:
        return self.get_account(account_id).history

    @property
    def transaction_log(self) -> Tuple[Transaction, ...]:
        """Snapshot of the global log, oldest first."""
        return tuple(self._log)

    def can_undo(self) -> bool:
        return bool(self._log)

    def last_reversible(self) -> Tuple[Transaction, ...]:
        """
        The records the next undo() would reverse.

        Returns:
            A transfer pair (TRANSFER_OUT, TRANSFER_IN), a single record,
            or an empty tuple when there is nothing to undo
        """
        if not self._log:
            return ()
        last = self._log[-1]
        if len(self._log) >= 2 and self._log[-2].pairs_with(last):
            return (self._log[-2], last)
        return (last,)

    def verify_balances(self) -> Dict[str, Any]:
        """
        Verify that each balance equals the signed sum of its own history
        and sits at or above its policy floor.

        Returns:
            Dict with keys:
            - 'valid': bool - True if every account satisfies the invariant
            - 'discrepancies': List[Dict] - account, balance, history_total,
              floor for each failing account

        Example:
            result = bank.verify_balances()
            assert result['valid'], result['discrepancies']
        """
        discrepancies = []
        for account_id in sorted(self.accounts):
            acc = self.accounts[account_id]
            total = acc.history_total()
            if total != acc.balance or acc.balance < acc.policy.floor:
                discrepancies.append({
                    'account': account_id,
                    'balance': acc.balance,
                    'history_total': total,
                    'floor': acc.policy.floor,
                })
        return {
            'valid': len(discrepancies) == 0,
            'discrepancies': discrepancies,
        }

    # ========================================================================
    # ACCOUNT CREATION (Mutating)
    # ========================================================================

    @_reported
    def create_account(
        self,
        owner: str,
        initial_balance: Decimal = ZERO,
        policy: Optional[AccountPolicy] = None,
    ) -> int:
        """
        Open a new account.

        A positive initial balance is recorded as a synthetic "initial"
        deposit in both the account history and the global log.

        Args:
            owner: Display name
            initial_balance: Opening balance (>= 0)
            policy: Account policy (default: checking, no overdraft)

        Returns:
            The new account id

        Raises:
            InvalidAmount: If initial_balance is negative
            ValueError: If owner is blank
        """
        account_id = self._next_id
        account = Account(account_id, owner, initial_balance, policy, clock=self._clock)
        # Id is consumed only once the account exists.
        self._next_id += 1
        self.accounts[account_id] = account
        for tx in account.history:
            self._record(tx)
        return account_id

    # ========================================================================
    # SINGLE-ACCOUNT OPERATIONS (Mutating)
    # ========================================================================

    @_reported
    def deposit(self, account_id: int, amount: Decimal, note: str = NOTE_MANUAL) -> Transaction:
        """
        Deposit into one account.

        Args:
            account_id: Target account
            amount: Amount (> 0)
            note: Annotation for the record

        Returns:
            The DEPOSIT record appended to the account and the global log

        Raises:
            AccountNotFound: If the account does not exist
            InvalidAmount: If amount is not positive
        """
        tx = self.get_account(account_id).deposit(amount, note)
        self._record(tx)
        return tx

    @_reported
    def withdraw(self, account_id: int, amount: Decimal, note: str = NOTE_MANUAL) -> Transaction:
        """
        Withdraw from one account.

        Args:
            account_id: Target account
            amount: Amount (> 0)
            note: Annotation for the record

        Returns:
            The WITHDRAW record appended to the account and the global log

        Raises:
            AccountNotFound: If the account does not exist
            InvalidAmount: If amount is not positive
            InsufficientFunds: If the balance is below amount
        """
        tx = self.get_account(account_id).withdraw(amount, note)
        self._record(tx)
        return tx

    # ========================================================================
    # TRANSFER (Mutating)
    # ========================================================================

    def _generate_transfer_id(self) -> str:
        """
        Generate a transfer correlation id.

        Format: xfer:{ledger_name}:{sequence:06d}
        """
        sequence = self._next_transfer
        self._next_transfer += 1
        return f"xfer:{self.name}:{sequence:06d}"

    @_reported
    def transfer(
        self,
        from_id: int,
        to_id: int,
        amount: Decimal,
        note: str = "",
    ) -> Tuple[Transaction, Transaction]:
        """
        Move ``amount`` from one account to another.

        Executes withdraw(source) then deposit(destination). Both accounts
        are resolved and the amount validated before either is touched. On
        success TRANSFER_OUT and TRANSFER_IN are appended to the global log,
        adjacent and in that order. Account histories carry the caller's
        note ("to 2: rent"); the global log mirrors each leg with the bare
        counterpart note ("to 2" / "from 1").

        Args:
            from_id: Source account
            to_id: Destination account
            amount: Amount (> 0)
            note: Optional annotation appended to the leg notes

        Returns:
            (TRANSFER_OUT record, TRANSFER_IN record) as written to the
            account histories

        Raises:
            SameAccount: If from_id == to_id
            AccountNotFound: If either account does not exist
            InvalidAmount: If amount is not positive
            InsufficientFunds: If the source balance is below amount
        """
        if from_id == to_id:
            raise SameAccount(f"cannot transfer from account {from_id} to itself")
        source = self.get_account(from_id)
        dest = self.get_account(to_id)
        amount = positive_amount(amount, "transfer")

        suffix = f": {note}" if note else ""
        transfer_id = self._generate_transfer_id()
        out_tx = source.withdraw(
            amount, f"to {to_id}{suffix}",
            kind=TxKind.TRANSFER_OUT, transfer_id=transfer_id,
        )
        try:
            in_tx = dest.deposit(
                amount, f"from {from_id}{suffix}",
                kind=TxKind.TRANSFER_IN, transfer_id=transfer_id,
            )
        except LedgerError as e:
            # Put the source back; both records are audited, neither is logged.
            self.audit_trail.append(out_tx)
            self._compensate(source.deposit, amount, NOTE_UNDO_TRANSFER, cause=e)
            raise

        self._record(out_tx, replace(out_tx, note=f"to {to_id}"))
        self._record(in_tx, replace(in_tx, note=f"from {from_id}"))
        return out_tx, in_tx

    # ========================================================================
    # UNDO (Mutating)
    # ========================================================================

    @_reported
    def undo(self) -> UndoResult:
        """
        Reverse the most recent entry of the global log.

        If the last two entries are the TRANSFER_OUT/TRANSFER_IN legs of one
        transfer, both are reversed together: the amount is withdrawn from
        the destination and deposited back to the source, noted
        "undo transfer". Otherwise only the last entry is reversed with the
        opposite primitive, noted "undo".

        Compensating records go to account histories and the audit trail
        only, so an undo cannot itself be undone and successive calls walk
        further back through the log.

        Returns:
            UndoResult with the removed log entries and the compensations

        Raises:
            NothingToUndo: If the global log is empty
            InsufficientFunds: If the reversal would overdraw an account
                (nothing is changed)
            LedgerInconsistency: If the second leg of a transfer reversal
                failed after the first was applied
        """
        pair = self.last_reversible()
        if not pair:
            raise NothingToUndo("nothing to undo")
        if len(pair) == 2:
            return self._undo_transfer(*pair)
        return self._undo_single(pair[0])

    def _undo_single(self, last: Transaction) -> UndoResult:
        account = self.get_account(last.account)
        if last.kind.increases:
            compensation = account.withdraw(last.amount, NOTE_UNDO)
        else:
            compensation = account.deposit(last.amount, NOTE_UNDO)
        self._log.pop()
        self.audit_trail.append(compensation)
        return UndoResult(reversed=(last,), compensations=(compensation,))

    def _undo_transfer(self, out_tx: Transaction, in_tx: Transaction) -> UndoResult:
        source = self.get_account(out_tx.account)
        dest = self.get_account(in_tx.account)
        amount = in_tx.amount

        # Check the only leg that can fail before applying either.
        if not dest.can_withdraw(amount):
            raise InsufficientFunds(
                f"cannot undo transfer: account {dest.id} balance {dest.balance} < {amount}"
            )

        first = dest.withdraw(amount, NOTE_UNDO_TRANSFER)
        try:
            second = source.deposit(amount, NOTE_UNDO_TRANSFER)
        except LedgerError as e:
            self.audit_trail.append(first)
            raise LedgerInconsistency(
                f"undo transfer {in_tx.transfer_id}: withdrew {amount} from account "
                f"{dest.id} but could not return it to account {source.id}: {e}"
            ) from e

        self._log.pop()
        self._log.pop()
        self.audit_trail.extend((first, second))
        return UndoResult(reversed=(out_tx, in_tx), compensations=(first, second))

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _record(self, tx: Transaction, logged: Optional[Transaction] = None) -> None:
        """Audit ``tx`` and append its mirror (``tx`` itself by default) to the global log."""
        self._log.append(logged or tx)
        self.audit_trail.append(tx)

    def _compensate(self, step: Callable[..., Transaction], amount: Decimal, note: str, cause: Exception) -> None:
        """
        Apply a rollback step for a half-done sequence.

        Raises:
            LedgerInconsistency: If the rollback step itself fails
        """
        try:
            self.audit_trail.append(step(amount, note))
        except LedgerError as e:
            raise LedgerInconsistency(f"rollback failed after {cause}: {e}") from e

    def __repr__(self) -> str:
        return f"Ledger({self.name!r}, accounts={len(self.accounts)}, log={len(self._log)})"
