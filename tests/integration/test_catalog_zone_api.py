"""Integration tests for the catalog and zone endpoints."""

from __future__ import annotations

import pytest

from modules.core.store import DjangoDocumentStore

pytestmark = pytest.mark.integration


@pytest.fixture()
def seeded():
    store = DjangoDocumentStore()
    store.save_document("type", {"name": "Pizza"}, id="t1")
    store.save_document("type", {"name": "Soda"}, id="t2")
    store.save_document("category", {"name": "Food", "types": ["type/t1", "type/x"]}, id="c1")
    store.save_document("category", {"name": "Drinks", "types": ["t2"]}, id="c2")
    store.save_document("Zone", {"name": "Centre", "ZIPCode": "75001", "isOpen": True}, id="z1")
    store.save_document("Zone", {"name": "La Marsa", "ZIPCode": "2070", "isOpen": False}, id="z2")
    return store


class TestCatalogApi:
    def test_categories(self, auth_client, seeded):
        response = auth_client.get("/api/v1/catalog/categories/")

        assert response.status_code == 200
        options = {c["id"]: c for c in response.json()}
        assert options["c1"]["types"] == [{"id": "t1", "name": "Pizza"}]
        assert options["c2"]["types"] == [{"id": "t2", "name": "Soda"}]

    def test_search(self, auth_client, seeded):
        body = auth_client.get("/api/v1/catalog/categories/?q=soda").json()
        assert [c["id"] for c in body] == ["c2"]


class TestZoneApi:
    def test_list(self, auth_client, seeded):
        body = auth_client.get("/api/v1/zones/").json()
        assert body["count"] == 2

    def test_filters(self, auth_client, seeded):
        body = auth_client.get("/api/v1/zones/?is_open=false").json()
        assert [z["id"] for z in body["results"]] == ["z2"]
        body = auth_client.get("/api/v1/zones/?q=750").json()
        assert [z["id"] for z in body["results"]] == ["z1"]

    def test_invalid_open_filter(self, auth_client, seeded):
        assert auth_client.get("/api/v1/zones/?is_open=maybe").status_code == 400
