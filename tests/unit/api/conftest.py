"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from cfmm.api.endpoints import get_engine
from cfmm.api.main import app
from cfmm.engine import Cfmm


@pytest.fixture
def client(engine: Cfmm):
    """Test client serving a fresh engine instead of the process-wide one."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client, engine: Cfmm):
    """Client whose engine has a (1000, 2000) pool of assets 0 and 1 owned by alice."""
    engine.add_liquidity("alice", 0, 0, 1_000, 1, 0, 2_000)
    return client
