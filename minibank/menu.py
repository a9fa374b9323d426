"""
menu.py - Interactive numbered menu over a Ledger

Reads commands from a text stream and writes results to another, so the
loop can be driven by a terminal or by a test. A failed operation prints
an error line and the loop carries on; only "0" or end of input stop it.

Run:
    python -m minibank
"""

from __future__ import annotations
import sys
from typing import Callable, Dict, List, Optional, TextIO

from .core import LedgerError, NOTE_MANUAL, to_amount
from .display import format_account, format_account_list
from .ledger import Ledger


MENU = (
    "\nMenu:\n"
    "\t1 Create checking\n"
    "\t2 Deposit\n"
    "\t3 Withdraw\n"
    "\t4 Transfer\n"
    "\t5 List accounts\n"
    "\t6 Print account\n"
    "\t7 Undo last\n"
    "\t0 Exit\n"
    "Choose: "
)


class _Console:
    """Prompt/answer helper around a pair of text streams."""

    def __init__(self, stdin: TextIO, stdout: TextIO):
        self.stdin = stdin
        self.stdout = stdout

    def write(self, text: str) -> None:
        self.stdout.write(text)

    def say(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def ask(self, prompt: str) -> str:
        """Write ``prompt`` and return the next line, stripped. Raises EOFError at end of input."""
        self.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def ask_fields(self, prompt: str, count: int) -> List[str]:
        """
        Ask for ``count`` whitespace-separated values.

        Values may be split over several lines; blank lines are skipped.
        Reading stops at the line that completes the set, and extra values
        on that line are an error.
        """
        self.write(prompt)
        fields: List[str] = []
        while len(fields) < count:
            line = self.stdin.readline()
            if not line:
                raise EOFError
            fields.extend(line.split())
        if len(fields) != count:
            raise ValueError(f"expected {count} values, got {len(fields)}")
        return fields


# ============================================================================
# COMMANDS
# ============================================================================

def _create(bank: Ledger, console: _Console) -> None:
    owner = console.ask("Owner: ")
    initial = to_amount(console.ask("Initial: ") or "0")
    account_id = bank.create_account(owner, initial)
    console.say(f"Created checking id={account_id}")


def _deposit(bank: Ledger, console: _Console) -> None:
    account_id, amount = console.ask_fields("acc id, amount: ", 2)
    bank.deposit(int(account_id), to_amount(amount), NOTE_MANUAL)
    console.say("OK")


def _withdraw(bank: Ledger, console: _Console) -> None:
    account_id, amount = console.ask_fields("acc id, amount: ", 2)
    bank.withdraw(int(account_id), to_amount(amount), NOTE_MANUAL)
    console.say("OK")


def _transfer(bank: Ledger, console: _Console) -> None:
    from_id, to_id, amount = console.ask_fields("from to amount: ", 3)
    bank.transfer(int(from_id), int(to_id), to_amount(amount), NOTE_MANUAL)
    console.say("OK")


def _list(bank: Ledger, console: _Console) -> None:
    console.say(format_account_list(bank))


def _print_account(bank: Ledger, console: _Console) -> None:
    account_id = int(console.ask("acc id: "))
    console.say(format_account(bank, account_id))


def _undo(bank: Ledger, console: _Console) -> None:
    try:
        bank.undo()
    except LedgerError as e:
        console.say(f"Undo failed: {e}")
        return
    console.say("Undo ok")


COMMANDS: Dict[str, Callable[[Ledger, _Console], None]] = {
    "1": _create,
    "2": _deposit,
    "3": _withdraw,
    "4": _transfer,
    "5": _list,
    "6": _print_account,
    "7": _undo,
}


# ============================================================================
# LOOP
# ============================================================================

def run(
    bank: Optional[Ledger] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Ledger:
    """
    Run the menu until "0" or end of input.

    Args:
        bank: Ledger to operate on (default: a new quiet Ledger)
        stdin: Input stream (default: sys.stdin)
        stdout: Output stream (default: sys.stdout)

    Returns:
        The ledger, in its final state
    """
    bank = bank if bank is not None else Ledger("bank", verbose=False)
    console = _Console(stdin or sys.stdin, stdout or sys.stdout)
    console.say("Mini bank (no overdraft) interactive")

    while True:
        try:
            choice = console.ask(MENU)
        except EOFError:
            break
        if choice == "0":
            console.say("Bye")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.say("Unknown")
            continue
        try:
            command(bank, console)
        except EOFError:
            break
        except LedgerError as e:
            console.say(f"Error: {e}")
        except ValueError as e:
            console.say(f"Error: invalid input ({e})")

    return bank


def main() -> None:
    run()


if __name__ == "__main__":
    main()
