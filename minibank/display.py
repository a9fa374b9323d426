"""
display.py - Text rendering of accounts and transaction records

Pure functions over a LedgerView. Nothing here mutates state or prints;
callers decide where the text goes.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_EVEN
from typing import List

from .core import CASH_DECIMAL_PLACES, LedgerView, Transaction, TxKind

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Short labels with the balance sign, as shown in account statements.
KIND_LABELS = {
    TxKind.DEPOSIT: "Dep +",
    TxKind.WITHDRAW: "Wdr -",
    TxKind.TRANSFER_IN: "TIn +",
    TxKind.TRANSFER_OUT: "TOut -",
}


def format_money(value: Decimal) -> str:
    """
    Render an amount to the cent (e.g., 40 -> '40.00', 1.005 -> '1.00').

    Only the text is rounded (ROUND_HALF_EVEN); stored amounts keep every digit.
    """
    cents = value.quantize(Decimal(10) ** -CASH_DECIMAL_PLACES, rounding=ROUND_HALF_EVEN)
    return f"{cents:f}"


def format_transaction(tx: Transaction) -> str:
    """
    Render one record as a statement line.

    Example:
        [2025-01-01 09:30:00] TOut - 40.00 | to 2: manual
    """
    when = tx.timestamp.strftime(TIMESTAMP_FORMAT)
    return f"[{when}] {KIND_LABELS[tx.kind]} {format_money(tx.amount)} | {tx.note}"


def format_account(view: LedgerView, account_id: int) -> str:
    """
    Render an account header followed by its history, one record per line.

    Raises:
        AccountNotFound: If the account does not exist
    """
    lines = [
        f"Account {account_id} ({view.get_owner(account_id)}) "
        f"balance={format_money(view.get_balance(account_id))}"
    ]
    for tx in view.get_history(account_id):
        lines.append("  " + format_transaction(tx))
    return "\n".join(lines)


def format_account_list(view: LedgerView) -> str:
    lines: List[str] = ["Accounts:"]
    for row in view.list_accounts():
        lines.append(f" id={row.id} owner={row.owner} bal={format_money(row.balance)}")
    return "\n".join(lines)
