"""Pytest configuration and fixtures."""

import pytest

from cfmm.engine import Cfmm
from cfmm.ledger.memory import InMemoryAssetLedger
from tests.helpers import make_engine, make_ledger


@pytest.fixture
def ledger() -> InMemoryAssetLedger:
    """Ledger with assets 0/1/2 and alice and bob holding 10,000 of each."""
    return make_ledger()


@pytest.fixture
def engine(ledger: InMemoryAssetLedger) -> Cfmm:
    """Engine with a 10% exchange fee over the ledger fixture."""
    return make_engine(ledger)
