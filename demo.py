#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: the minibank ledger step by step

Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3: Foundation - Opening accounts, deposits, rejected withdrawals
  4-5: Transfers  - Two legs, one pair in the global log
  6-7: Undo       - Reversing a transfer pair, walking back the log

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
import sys

from minibank import (
    Ledger, InsufficientFunds, NothingToUndo,
    format_account, format_account_list, format_transaction,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    start_time: datetime = datetime(2025, 1, 1, 9, 0, 0)
    alice_initial: Decimal = Decimal("100.00")
    bob_initial: Decimal = Decimal("0.00")
    transfer_amount: Decimal = Decimal("40.00")
    overdraw_amount: Decimal = Decimal("500.00")


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


def print_log(bank: Ledger):
    print(f"Global log ({len(bank.transaction_log)} entries):")
    for tx in bank.transaction_log:
        print("  " + format_transaction(tx))


# ============================================================================
# PHASE 1: FOUNDATION (Steps 1-3)
# ============================================================================

def step_01_open_accounts():
    """Open two checking accounts."""
    step_header(1, "Opening Accounts",
        "Ids are assigned 1, 2, 3, ... and a positive opening balance is a deposit.")

    bank = Ledger("tutorial", clock=lambda: CONFIG.start_time, verbose=True)
    print(f'>>> bank.create_account("Alice", {CONFIG.alice_initial})')
    alice = bank.create_account("Alice", CONFIG.alice_initial)
    print(f'>>> bank.create_account("Bob", {CONFIG.bob_initial})')
    bob = bank.create_account("Bob", CONFIG.bob_initial)

    section_header("State")
    print(format_account_list(bank))
    print_log(bank)
    print("""
    Bob opened with zero, so only Alice has an "initial" deposit record.
    """)
    return bank, alice, bob


def step_02_deposit(bank: Ledger, alice: int):
    step_header(2, "Deposits",
        "Every applied mutation appears in the account history and the global log.")
    print(f">>> bank.deposit({alice}, Decimal('25'))")
    bank.deposit(alice, Decimal("25"))
    print(format_account(bank, alice))
    print_log(bank)
    return bank


def step_03_rejection(bank: Ledger, alice: int):
    step_header(3, "Rejected Withdrawals",
        "A failed operation changes nothing: no balance change, no log entry.")
    before = len(bank.transaction_log)
    print(f">>> bank.withdraw({alice}, {CONFIG.overdraw_amount})")
    try:
        bank.withdraw(alice, CONFIG.overdraw_amount)
    except InsufficientFunds as e:
        print(f"Rejected ({e.kind.value}): {e}")
    print(f"Balance: {bank.get_balance(alice)}  log: {before} -> {len(bank.transaction_log)}")
    return bank


# ============================================================================
# PHASE 2: TRANSFERS (Steps 4-5)
# ============================================================================

def step_04_transfer(bank: Ledger, alice: int, bob: int):
    step_header(4, "Transfers",
        "A transfer is withdraw(source) then deposit(destination).")
    print(f">>> bank.transfer({alice}, {bob}, {CONFIG.transfer_amount})")
    bank.transfer(alice, bob, CONFIG.transfer_amount)
    print(format_account_list(bank))
    print_log(bank)
    return bank


def step_05_pair(bank: Ledger):
    step_header(5, "The Transfer Pair",
        "TRANSFER_OUT and TRANSFER_IN sit side by side and share a transfer id.")
    for tx in bank.last_reversible():
        print(f"  {tx!r}")
    return bank


# ============================================================================
# PHASE 3: UNDO (Steps 6-7)
# ============================================================================

def step_06_undo_transfer(bank: Ledger, alice: int, bob: int):
    step_header(6, "Undoing a Transfer",
        "Undo reverses both legs together and removes the pair from the log.")
    print(">>> bank.undo()")
    result = bank.undo()
    print(f"Reversed {len(result.reversed)} entries (transfer={result.was_transfer})")
    print(format_account_list(bank))
    print_log(bank)
    section_header("Account history is never rewritten")
    print(format_account(bank, bob))
    return bank


def step_07_walk_back(bank: Ledger):
    step_header(7, "Walking Back",
        "Undo is one level deep: repeated calls reverse older entries.")
    while True:
        try:
            bank.undo()
        except NothingToUndo as e:
            print(f"Stopped: {e}")
            break
    print(format_account_list(bank))
    print(f"Audit trail keeps all {len(bank.audit_trail)} records.")
    result = bank.verify_balances()
    print(f"Balances match histories: {result['valid']}")


def main():
    bank, alice, bob = step_01_open_accounts()
    wait_for_enter()

    bank = step_02_deposit(bank, alice)
    wait_for_enter()

    bank = step_03_rejection(bank, alice)
    wait_for_enter()

    bank = step_04_transfer(bank, alice, bob)
    wait_for_enter()

    bank = step_05_pair(bank)
    wait_for_enter()

    bank = step_06_undo_transfer(bank, alice, bob)
    wait_for_enter()

    step_07_walk_back(bank)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print("""
    Next steps:
      - python -m minibank for the interactive menu
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
