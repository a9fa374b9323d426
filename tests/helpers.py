"""
helpers.py - Invariant checks, a fixed clock and operation strategies shared by the test suites
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict

from hypothesis import strategies as st

from minibank import Ledger, Account, LedgerError


FIXED_TIME = datetime(2025, 1, 1, 9, 30, 0)


def fixed_clock() -> datetime:
    return FIXED_TIME


def signed_history_total(account: Account) -> Decimal:
    """Signed sum of an account's own history, computed independently of Account."""
    total = Decimal("0")
    for tx in account.history:
        total += tx.amount if tx.kind.increases else -tx.amount
    return total


def assert_invariants(bank: Ledger) -> None:
    """Every balance is >= 0 and equals the signed sum of its own history."""
    for account in bank.accounts.values():
        assert account.balance >= Decimal("0"), f"{account} overdrawn"
        assert account.balance == signed_history_total(account), f"{account} drifted from history"


def snapshot(bank: Ledger) -> Dict[str, object]:
    """Everything a rejected operation must leave untouched."""
    return {
        "balances": {a.id: a.balance for a in bank.accounts.values()},
        "histories": {a.id: a.history for a in bank.accounts.values()},
        "log": bank.transaction_log,
        "audit": tuple(bank.audit_trail),
    }


# =============================================================================
# OPERATION SEQUENCES (shared hypothesis strategies)
# =============================================================================

ACCOUNT_IDS = st.integers(min_value=1, max_value=4)  # 4 never exists


@st.composite
def decimal_amount(draw, min_value=Decimal("-5"), max_value=Decimal("300")):
    """Generate an amount, sometimes sub-cent, sometimes invalid (zero or negative)."""
    return draw(st.decimals(
        min_value=min_value,
        max_value=max_value,
        places=3,
        allow_nan=False,
        allow_infinity=False,
    ))


@st.composite
def operation(draw):
    """One of deposit / withdraw / transfer / undo with random arguments."""
    kind = draw(st.sampled_from(["deposit", "withdraw", "transfer", "undo"]))
    return (kind, draw(ACCOUNT_IDS), draw(ACCOUNT_IDS), draw(decimal_amount()))


def apply(bank: Ledger, op) -> bool:
    """Apply one operation; return False if the ledger rejected it."""
    kind, a, b, amount = op
    try:
        if kind == "deposit":
            bank.deposit(a, amount)
        elif kind == "withdraw":
            bank.withdraw(a, amount)
        elif kind == "transfer":
            bank.transfer(a, b, amount)
        else:
            bank.undo()
    except LedgerError:
        return False
    return True


def new_bank() -> Ledger:
    """Alice (1) 500, Bob (2) 100, Carol (3) 0."""
    bank = Ledger("prop", clock=fixed_clock, verbose=False)
    bank.create_account("Alice", Decimal("500"))
    bank.create_account("Bob", Decimal("100"))
    bank.create_account("Carol")
    return bank
