"""HTTP tests for the invocation and admin endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from carauction.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _invoke(client, fcn, *args):
    return client.post("/invoke", json={"fcn": fcn, "args": list(args)})


class TestInvokeEndpoint:
    def test_full_auction_flow(self, client):
        assert _invoke(client, "initLedger").json() == {"status": "ok", "payload": None}
        assert _invoke(client, "makeOffer", "4000", "ABCD", "memberB@acme.org").status_code == 200

        response = _invoke(client, "closeBidding", "ABCD")

        assert response.status_code == 200
        assert response.json()["payload"]["listingState"] == "SOLD"
        vehicle = client.get("/query/1234").json()["payload"]
        assert vehicle == {"docType": "vehicle", "owner": "memberB@acme.org"}
        seller = _invoke(client, "query", "memberA@acme.org").json()["payload"]
        assert seller["balance"] == 9000

    def test_error_kinds_map_to_status(self, client):
        _invoke(client, "initLedger")

        response = _invoke(client, "closeBidding", "ABCD")
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "NoOffersExist"

        response = _invoke(client, "makeOffer", "4000", "ABCD", "memberA@acme.org")
        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "SelfBidNotAllowed"

        response = _invoke(client, "makeOffer", "four", "ABCD", "memberB@acme.org")
        assert response.json()["detail"]["kind"] == "MalformedNumericInput"

        response = _invoke(client, "query")
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "ArgumentCountMismatch"

        assert client.get("/query/missing").status_code == 404
        assert _invoke(client, "dropTables").status_code == 404

    def test_request_shape_validated(self, client):
        assert client.post("/invoke", json={"args": []}).status_code == 422
        assert client.post("/invoke", json={"fcn": "query", "args": [1]}).status_code == 422

    def test_each_client_gets_fresh_ledger(self, client):
        assert client.get("/query/ABCD").status_code == 404


class TestAdminEndpoints:
    def test_stats_report_balances_and_listings(self, client):
        _invoke(client, "initLedger")
        _invoke(client, "makeOffer", "3000", "ABCD", "memberC@acme.org")

        stats = client.get("/admin/stats").json()

        assert stats["records_by_type"] == {"member": 3, "vehicle": 1, "vehicleListing": 1}
        assert stats["listings_by_state"] == {"FOR_SALE": 1}
        assert stats["open_offers"] == 1
        assert stats["total_member_balance"] == 15000

    def test_health_and_config(self, client):
        health = client.get("/admin/health").json()
        assert health["status"] == "healthy"
        assert health["storage_backend"] == "in_memory"

        config = client.get("/admin/config").json()
        assert {"name": "makeOffer", "arity": 3} in config["operations"]

    def test_health_degraded_when_ledger_unreachable(self, client):
        class Unreachable:
            async def get_state(self, key):
                raise ConnectionError("down")

        client.app.state.storage = Unreachable()
        health = client.get("/admin/health").json()
        assert health["status"] == "degraded"
        assert health["ledger"] == "unreachable"
