"""
conftest.py - Shared pytest fixtures for minibank tests

Provides common fixtures used across unit, conformance and functional tests:
- Ledgers (empty, Alice/Bob funded, three-account)
- A fixed clock so record timestamps are reproducible
"""

import pytest
from decimal import Decimal

from minibank import Ledger

from tests.helpers import fixed_clock


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def empty_bank():
    """Fresh ledger with no accounts."""
    return Ledger("test", clock=fixed_clock, verbose=False)


@pytest.fixture
def alice_bob_bank(empty_bank):
    """Alice (id=1) opened with 100, Bob (id=2) opened with 0."""
    empty_bank.create_account("Alice", Decimal("100"))
    empty_bank.create_account("Bob", Decimal("0"))
    return empty_bank


@pytest.fixture
def three_account_bank():
    """Alice (1) 1000, Bob (2) 500, Carol (3) 250."""
    bank = Ledger("three", clock=fixed_clock, verbose=False)
    bank.create_account("Alice", Decimal("1000"))
    bank.create_account("Bob", Decimal("500"))
    bank.create_account("Carol", Decimal("250"))
    return bank
