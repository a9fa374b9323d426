"""
Core types and pure functions for the minibank ledger.

This module provides the foundational data structures for the bank:
1. Protocols: LedgerView for read-only ledger access
2. Immutable data structures: Transaction, AccountPolicy, AccountSummary
3. Exceptions: LedgerError and one subclass per ErrorKind
4. Amount coercion: to_amount() turns caller input into an exact Decimal

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, getcontext
from enum import Enum
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable


# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Balances are Decimal and must be computed deterministically.
# The global context is configured once at module load time.
#
# PRECONDITION: No other code should modify the global Decimal context.
#
_MINIBANK_DECIMAL_CONTEXT = getcontext()
_MINIBANK_DECIMAL_CONTEXT.prec = 50
_MINIBANK_DECIMAL_CONTEXT.rounding = ROUND_HALF_EVEN


# ============================================================================
# CONSTANTS
# ============================================================================

# Account identifiers are allocated from here upward and never reused.
FIRST_ACCOUNT_ID = 1

# Amounts are stored exactly; statements show them to the cent.
CASH_DECIMAL_PLACES = 2

ZERO = Decimal("0")

# Notes attached to system-generated records.
NOTE_INITIAL = "initial"
NOTE_MANUAL = "manual"
NOTE_UNDO = "undo"
NOTE_UNDO_TRANSFER = "undo transfer"

# Account kinds (strings, not enum, same as transaction notes).
ACCOUNT_KIND_CHECKING = "CHECKING"


# ============================================================================
# ENUMS
# ============================================================================

class TxKind(Enum):
    """
    Kind of a balance-affecting event.

    DEPOSIT and TRANSFER_IN increased the account's balance when recorded;
    WITHDRAW and TRANSFER_OUT decreased it.
    """
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"

    @property
    def increases(self) -> bool:
        """True if a record of this kind added to the balance."""
        return self in (TxKind.DEPOSIT, TxKind.TRANSFER_IN)

    @property
    def is_transfer(self) -> bool:
        return self in (TxKind.TRANSFER_IN, TxKind.TRANSFER_OUT)


class ErrorKind(Enum):
    """
    Discriminator carried by every LedgerError.

    Callers that only need to branch on the failure reason can inspect
    ``err.kind`` instead of matching on exception classes.
    """
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    ACCOUNT_NOT_FOUND = "account_not_found"
    SAME_ACCOUNT = "same_account"
    NOTHING_TO_UNDO = "nothing_to_undo"
    INCONSISTENT = "inconsistent"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    kind: Optional[ErrorKind] = None


class InvalidAmount(LedgerError):
    """Raised for a non-positive amount or a negative initial balance."""
    kind = ErrorKind.INVALID_AMOUNT


class InsufficientFunds(LedgerError):
    """Raised when a withdrawal or reversal would push a balance below its floor."""
    kind = ErrorKind.INSUFFICIENT_FUNDS


class AccountNotFound(LedgerError):
    """Raised when an account id is not known to the ledger."""
    kind = ErrorKind.ACCOUNT_NOT_FOUND


class SameAccount(LedgerError):
    """Raised when a transfer names the same account as source and destination."""
    kind = ErrorKind.SAME_ACCOUNT


class NothingToUndo(LedgerError):
    """Raised when undo is requested on an empty transaction log."""
    kind = ErrorKind.NOTHING_TO_UNDO


class LedgerInconsistency(LedgerError):
    """
    Raised when a multi-step sequence failed after its first step was applied
    and the ledger could not restore the previous state.

    This is fatal: balances and logs may no longer agree.
    """
    kind = ErrorKind.INCONSISTENT


# ============================================================================
# AMOUNTS
# ============================================================================

def to_amount(value: Any) -> Decimal:
    """
    Coerce caller input to an exact Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") rather than
    its binary expansion. The value is kept as given, sub-cent digits
    included; rounding to CASH_DECIMAL_PLACES happens only when rendering.
    Sign is not checked here.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Finite Decimal equal to the input

    Raises:
        InvalidAmount: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"amount must be a number, got {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmount(f"amount must be a number, got {value!r}") from None
    if value.is_nan() or value.is_infinite():
        raise InvalidAmount(f"amount must be finite, got {value}")
    return value


def positive_amount(value: Any, what: str = "amount") -> Decimal:
    """Coerce ``value`` with to_amount() and require it to be > 0."""
    amount = to_amount(value)
    if amount <= ZERO:
        raise InvalidAmount(f"{what} must be > 0, got {amount}")
    return amount


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Transaction:
    """
    An immutable record of one balance-affecting event on one account.

    Attributes:
        account: Id of the account whose balance changed.
        kind: What happened (see TxKind.increases for the sign).
        amount: Positive amount moved.
        note: Free-text annotation ("manual", "undo", "to 2", ...).
        timestamp: Ledger clock reading when the record was created.
        transfer_id: Correlation id shared by both legs of one transfer,
                     None for every other record.
    """
    account: int
    kind: TxKind
    amount: Decimal
    note: str
    timestamp: datetime
    transfer_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise InvalidAmount(f"Transaction amount must be Decimal, got {type(self.amount)}")
        if self.amount.is_nan() or self.amount <= ZERO:
            raise InvalidAmount(f"Transaction amount must be > 0, got {self.amount}")
        if self.kind.is_transfer and not self.transfer_id:
            raise ValueError(f"{self.kind.name} record requires a transfer_id")

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign it had on the account balance."""
        return self.amount if self.kind.increases else -self.amount

    def pairs_with(self, later: Transaction) -> bool:
        """
        True if ``self`` (TRANSFER_OUT) and ``later`` (TRANSFER_IN) are the
        two legs of one transfer.
        """
        return (
            self.kind is TxKind.TRANSFER_OUT
            and later.kind is TxKind.TRANSFER_IN
            and self.amount == later.amount
            and self.transfer_id == later.transfer_id
        )

    def __repr__(self) -> str:
        tag = f", transfer={self.transfer_id}" if self.transfer_id else ""
        return f"Transaction({self.kind.name} {self.amount} acc={self.account} '{self.note}'{tag})"


@dataclass(frozen=True, slots=True)
class AccountPolicy:
    """
    Capability flags for an account kind.

    Withdrawal is allowed while ``balance - amount >= -overdraft_limit``.
    Only the checking kind exists and its limit is zero, so balances never
    go negative; new kinds are a new policy value, not a new subclass.

    Attributes:
        kind: Account kind label (e.g., ACCOUNT_KIND_CHECKING).
        overdraft_limit: How far below zero a balance may go (>= 0).
    """
    kind: str
    overdraft_limit: Decimal = ZERO

    def __post_init__(self):
        if not self.kind or not self.kind.strip():
            raise ValueError("AccountPolicy kind cannot be empty")
        if not isinstance(self.overdraft_limit, Decimal):
            raise ValueError(f"overdraft_limit must be Decimal, got {type(self.overdraft_limit)}")
        if self.overdraft_limit < ZERO:
            raise ValueError(f"overdraft_limit cannot be negative, got {self.overdraft_limit}")

    @property
    def floor(self) -> Decimal:
        """Lowest balance this policy permits."""
        return -self.overdraft_limit


@dataclass(frozen=True, slots=True)
class AccountSummary:
    """One row of Ledger.list_accounts()."""
    id: int
    owner: str
    balance: Decimal


@dataclass(frozen=True, slots=True)
class UndoResult:
    """
    Outcome of a successful Ledger.undo().

    Attributes:
        reversed: Global-log records that were removed (one, or a transfer pair).
        compensations: Records appended to account histories by the reversal.
    """
    reversed: Tuple[Transaction, ...]
    compensations: Tuple[Transaction, ...]

    @property
    def was_transfer(self) -> bool:
        return len(self.reversed) == 2


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Rendering code and the menu accept a LedgerView to declare that they
    only read. The Ledger class implements this protocol but also provides
    mutation methods. For testing, FakeView provides an immutable double.
    """

    def list_accounts(self) -> List[AccountSummary]:
        """Return every account as (id, owner, balance), ordered by id."""
        ...

    def get_balance(self, account_id: int) -> Decimal:
        """Return the account's balance. Raises AccountNotFound."""
        ...

    def get_owner(self, account_id: int) -> str:
        """Return the account's owner. Raises AccountNotFound."""
        ...

    def get_history(self, account_id: int) -> Tuple[Transaction, ...]:
        """Return the account's own records in insertion order. Raises AccountNotFound."""
        ...


# ============================================================================
# POLICY FACTORIES
# ============================================================================

def checking() -> AccountPolicy:
    """
    Policy for a plain checking account: no overdraft.

    Returns:
        AccountPolicy with kind CHECKING and overdraft_limit 0
    """
    return AccountPolicy(kind=ACCOUNT_KIND_CHECKING, overdraft_limit=ZERO)
