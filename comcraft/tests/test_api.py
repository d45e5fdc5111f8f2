"""
Tests: HTTP routes.

Run with:
    pytest comcraft/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from comcraft.api import create_app
from comcraft.config import Settings
from comcraft.exceptions import PersistenceError
from comcraft.persistence import InMemoryRowStore


class _FailingStore(InMemoryRowStore):
    def insert(self, table, row):
        raise PersistenceError("write refused")


class _LifecycleStore(InMemoryRowStore):
    def __init__(self):
        super().__init__()
        self.events = []

    def connect(self):
        self.events.append("connect")

    def close(self):
        self.events.append("close")


@pytest.fixture
def client():
    app = create_app(settings=Settings(store_backend="memory"), store=InMemoryRowStore())
    with TestClient(app) as c:
        yield c


class TestCatalogRoutes:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_list_services(self, client):
        services = client.get("/api/catalog").json()
        assert len(services) == 5
        assert services[0]["tiers"][0]["price"] == 1500

    def test_bundles(self, client):
        bundles = client.get("/api/catalog/bundles").json()
        assert [b["bundle_price"] for b in bundles] == [1440, 4240, 3200]

    def test_service_card(self, client):
        card = client.get("/api/catalog/api", params={"tier_index": 0}).json()
        assert card["title"] == "API Development"

    def test_unknown_service_card(self, client):
        assert client.get("/api/catalog/nope").status_code == 404


class TestQuoteAndOrderRoutes:
    def test_quote(self, client):
        resp = client.post("/api/quotes", json={
            "selections": [
                {"service_id": "website", "tier_index": 1},
                {"service_id": "discord_bot"},
            ],
            "options": {"rush": True},
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["subtotal"] == pytest.approx(2700)
        assert body["total"] == pytest.approx(2340)
        assert body["timeline"] == "1 weeks"

    def test_empty_quote(self, client):
        body = client.post("/api/quotes", json={}).json()
        assert body["total"] == 0
        assert body["savings"] is None

    def test_create_order(self, client):
        resp = client.post("/api/orders", json={
            "customer": {"discord_id": "123456789", "discord_tag": "bob#0002"},
            "selections": [{"service_id": "api", "tier_index": 2}],
            "options": {"first_time": True},
            "channel_id": "555",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["order_number"].startswith("CC")
        assert body["order_id"]
        assert body["quote"]["total"] == pytest.approx(4250)

    def test_order_requires_customer(self, client):
        assert client.post("/api/orders", json={"selections": []}).status_code == 422

    def test_persistence_failure_is_503(self):
        app = create_app(settings=Settings(store_backend="memory"), store=_FailingStore())
        with TestClient(app) as c:
            resp = c.post("/api/orders", json={
                "customer": {"discord_id": "123456789"},
                "selections": [{"service_id": "website"}],
            })
        assert resp.status_code == 503


class TestPermissionRoutes:
    def test_round_trip(self, client):
        base = "/api/guilds/42/command-permissions"

        listing = client.get(base).json()
        assert len(listing["permissions"]) == 7

        resp = client.put(base, json={"permissions": [
            {"command_name": "buy", "allowed_role_ids": ["r1"]},
        ]})
        assert resp.json() == {"success": True, "updated": 1}

        denied = client.post(f"{base}/check", json={"command_name": "buy", "role_ids": ["r2"]})
        assert denied.json() == {"command_name": "buy", "allowed": False}

        admin = client.post(f"{base}/check", json={"command_name": "buy", "is_administrator": True})
        assert admin.json()["allowed"] is True


class TestLifecycle:
    def test_startup_connects_and_shutdown_closes_store(self):
        store = _LifecycleStore()
        app = create_app(settings=Settings(store_backend="memory"), store=store)
        assert store.events == []
        with TestClient(app) as c:
            assert store.events == ["connect"]
            c.get("/health")
        assert store.events == ["connect", "close"]

    def test_services_share_the_injected_store(self):
        store = InMemoryRowStore()
        app = create_app(settings=Settings(store_backend="memory"), store=store)
        assert app.state.store is store
        assert app.state.provisioner.orders.store is store
        assert app.state.access_gate.rules.store is store
