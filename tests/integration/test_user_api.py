"""Integration tests for the customer and delivery-person endpoints."""

from __future__ import annotations

import pytest

from modules.core.store import DjangoDocumentStore

pytestmark = pytest.mark.integration


@pytest.fixture()
def seeded():
    store = DjangoDocumentStore()
    store.save_document("users", {"role": "Client", "firstName": "Amira"}, id="c1")
    store.save_document("users", {"role": "Client", "firstName": "Yasmine"}, id="c2")
    store.save_document(
        "users",
        {
            "role": "Delivery_Man",
            "firstName": "Karim",
            "ShippingScore": 0,
            "address": [{"address": "12 Rue de Marseille", "title": "Home"}],
        },
        id="d1",
    )
    store.save_document(
        "users", {"role": "Delivery_Man", "firstName": "Lina", "ShippingScore": 3}, id="d2"
    )
    store.save_document("Commande", {"user": "users/c2", "TotalAmount": 12.5}, id="o1")
    store.save_document("Commande", {"user": "users/c2", "TotalAmount": "7.50"}, id="o2")
    store.save_document("Commande", {"user": "users/c1", "TotalAmount": 4}, id="o3")
    return store


class TestCustomerApi:
    def test_total_spent(self, auth_client, seeded):
        response = auth_client.get("/api/v1/customers/")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [(c["id"], c["total_spent"], c["order_count"]) for c in body["results"]] == [
            ("c2", "20.00", 2),
            ("c1", "4.00", 1),
        ]

    def test_requires_authentication(self, api_client, seeded):
        assert api_client.get("/api/v1/customers/").status_code == 401


class TestDeliveryPersonApi:
    def test_list_with_availability(self, auth_client, seeded):
        body = auth_client.get("/api/v1/delivery-people/").json()

        people = {p["id"]: p for p in body["results"]}
        assert people["d1"]["availability"] == "Available"
        assert people["d1"]["addresses"] == ["12 Rue de Marseille"]
        assert people["d2"]["availability"] == "Busy"

    def test_filters(self, auth_client, seeded):
        body = auth_client.get("/api/v1/delivery-people/?availability=busy").json()
        assert [p["id"] for p in body["results"]] == ["d2"]
        body = auth_client.get("/api/v1/delivery-people/?q=marseille").json()
        assert [p["id"] for p in body["results"]] == ["d1"]

    def test_invalid_availability(self, auth_client, seeded):
        response = auth_client.get("/api/v1/delivery-people/?availability=sleeping")
        assert response.status_code == 400
