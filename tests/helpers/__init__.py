"""Test helpers module for shared test utilities.

- constants: Accounts, asset ids and starting balances
- factories: Ledger and engine factory functions
"""

from tests.helpers.constants import (
    ALICE,
    ASSET_0,
    ASSET_1,
    ASSET_2,
    BOB,
    CAROL,
    MIN_BALANCES,
    STARTING_BALANCE,
)
from tests.helpers.factories import assert_conserved, make_engine, make_ledger

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "CAROL",
    "ASSET_0",
    "ASSET_1",
    "ASSET_2",
    "MIN_BALANCES",
    "STARTING_BALANCE",
    # Factories
    "make_ledger",
    "make_engine",
    "assert_conserved",
]
