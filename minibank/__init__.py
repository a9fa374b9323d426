"""
minibank - Single-process bank ledger with one-step undo

Accounts hold a balance and their own history; the Ledger routes deposits,
withdrawals and transfers to them, mirrors every applied record into a
global log, and can undo the most recent entry or transfer pair.

Usage:
    from decimal import Decimal
    from minibank import Ledger

    bank = Ledger("main", verbose=False)
    alice = bank.create_account("Alice", Decimal("100"))
    bob = bank.create_account("Bob")

    bank.transfer(alice, bob, Decimal("40"))
    bank.get_balance(alice)          # Decimal("60")

    bank.undo()                      # reverses both transfer legs
    bank.get_balance(alice)          # Decimal("100")
"""

# Core types
from .core import (
    LedgerView,
    Transaction,
    TxKind,
    AccountPolicy,
    AccountSummary,
    UndoResult,
    ErrorKind,
    LedgerError,
    InvalidAmount,
    InsufficientFunds,
    AccountNotFound,
    SameAccount,
    NothingToUndo,
    LedgerInconsistency,
    checking,
    to_amount,
    positive_amount,
    FIRST_ACCOUNT_ID,
    CASH_DECIMAL_PLACES,
    ACCOUNT_KIND_CHECKING,
    NOTE_INITIAL,
    NOTE_MANUAL,
    NOTE_UNDO,
    NOTE_UNDO_TRANSFER,
)

# Account
from .account import Account

# Ledger
from .ledger import Ledger

# Rendering
from .display import (
    format_money,
    format_transaction,
    format_account,
    format_account_list,
)

# Menu
from .menu import run


__all__ = [
    # Core
    'LedgerView', 'Transaction', 'TxKind', 'AccountPolicy', 'AccountSummary',
    'UndoResult', 'checking', 'to_amount', 'positive_amount',
    'FIRST_ACCOUNT_ID', 'CASH_DECIMAL_PLACES', 'ACCOUNT_KIND_CHECKING',
    'NOTE_INITIAL', 'NOTE_MANUAL', 'NOTE_UNDO', 'NOTE_UNDO_TRANSFER',
    # Errors
    'ErrorKind', 'LedgerError', 'InvalidAmount', 'InsufficientFunds',
    'AccountNotFound', 'SameAccount', 'NothingToUndo', 'LedgerInconsistency',
    # Ledger
    'Account', 'Ledger',
    # Rendering
    'format_money', 'format_transaction', 'format_account', 'format_account_list',
    # Menu
    'run',
]

__version__ = '1.0.0'
