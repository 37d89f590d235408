"""Tests for API error mapping, validation and request limits."""

import pytest
from fastapi.testclient import TestClient

from cfmm.api.main import app
from cfmm.safe_int import BALANCE_MAX
from tests.helpers import ALICE


class TestRejectedOperations:
    def test_ledger_error_body(self, client, engine, ledger):
        response = client.post(
            "/liquidity/add",
            json={
                "who": ALICE,
                "assetA": 0,
                "maxAmountA": "15000",
                "assetB": 1,
                "maxAmountB": "1000",
            },
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "BalanceLow"
        assert ALICE in body["detail"]
        assert ledger.balance_of(0, ALICE) == 10_000

    def test_events_not_deposited_on_rejection(self, client, engine):
        client.post(
            "/exchange",
            json={"who": ALICE, "sourceAsset": 0, "sourceAmount": "10", "destAsset": 1},
        )
        assert engine.events == []


class TestAssetPathSegments:
    def test_non_ascii_digit_names_a_string_asset(self, client):
        response = client.get("/pools/%C2%B2/1")

        assert response.status_code == 200
        data = response.json()
        assert data["assetA"] == "\u00b2"
        assert data["reserveA"] == "0"

    def test_non_ascii_digit_asset_is_unknown_to_ledger(self, client):
        response = client.post("/assets/%C2%B2/mint", json={"who": ALICE, "amount": "500"})
        assert response.status_code == 400
        assert response.json()["error"] == "UnknownAsset"


class TestValidation:
    @pytest.mark.parametrize(
        "amount",
        ["-1", str(BALANCE_MAX + 1), "12abc", "1.5", True],
    )
    def test_invalid_balance(self, client, amount):
        response = client.post(
            "/exchange",
            json={"who": ALICE, "sourceAsset": 0, "sourceAmount": amount, "destAsset": 1},
        )
        assert response.status_code == 422

    def test_missing_field(self, client):
        response = client.post("/exchange", json={"who": ALICE, "sourceAsset": 0})
        assert response.status_code == 422

    def test_empty_account(self, client):
        response = client.post(
            "/exchange",
            json={"who": "", "sourceAsset": 0, "sourceAmount": "1", "destAsset": 1},
        )
        assert response.status_code == 422

    def test_invalid_asset_id(self, client):
        response = client.post(
            "/exchange",
            json={"who": ALICE, "sourceAsset": -1, "sourceAmount": "1", "destAsset": 1},
        )
        assert response.status_code == 422


class TestRequestSizeLimits:
    def test_oversized_request_returns_413(self, client):
        response = client.post(
            "/exchange",
            json={"who": ALICE},
            headers={"Content-Length": str(1024 * 1024)},
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"


class TestHealthEndpoint:
    def test_health_returns_ok(self):
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
