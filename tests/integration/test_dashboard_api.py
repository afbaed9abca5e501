"""Integration tests for the dashboard endpoints.

Covers:
- Summary counters, revenue series per granularity, leaderboard, recent
  orders.
- 400 for bad query parameters.
"""

from __future__ import annotations

import pytest

from modules.core.store import DjangoDocumentStore

pytestmark = pytest.mark.integration


@pytest.fixture()
def seeded(settings):
    settings.TIME_ZONE = "UTC"
    store = DjangoDocumentStore()
    store.save_document("users", {"role": "Client", "firstName": "Amira"}, id="c1")
    for id_, score in (("d1", 5), ("d2", 9), ("d3", 5), ("d4", 1)):
        store.save_document(
            "users",
            {"role": "Delivery_Man", "firstName": id_.upper(), "ShippingScore": score},
            id=id_,
        )
    orders = [
        ("o1", "2024-01-05T10:00:00Z", 10),
        ("o2", "2024-01-20T10:00:00Z", 20),
        ("o3", "2024-02-03T10:00:00Z", 5),
    ]
    for id_, placed, total in orders:
        store.save_document(
            "Commande",
            {"user": "users/c1", "DatePAssCommande": placed, "TotalAmount": total},
            id=id_,
        )
    return store


class TestSummary:
    def test_summary(self, auth_client, seeded):
        response = auth_client.get("/api/v1/dashboard/summary/")
        assert response.status_code == 200
        assert response.json() == {
            "total_sales": "35.00",
            "order_count": 3,
            "user_count": 5,
            "delivery_person_count": 4,
        }

    def test_requires_authentication(self, api_client, seeded):
        assert api_client.get("/api/v1/dashboard/summary/").status_code == 401


class TestRevenue:
    def test_monthly_by_default(self, auth_client, seeded):
        body = auth_client.get("/api/v1/dashboard/revenue/").json()
        assert [(b["label"], b["total"]) for b in body] == [
            ("January 2024", "30.00"),
            ("February 2024", "5.00"),
        ]

    def test_weekly(self, auth_client, seeded):
        body = auth_client.get("/api/v1/dashboard/revenue/?granularity=week").json()
        assert [b["label"] for b in body] == ["Week 1, 2024", "Week 3, 2024", "Week 5, 2024"]

    def test_daily(self, auth_client, seeded):
        body = auth_client.get("/api/v1/dashboard/revenue/?granularity=day").json()
        assert [b["key"] for b in body] == ["2024-01-05", "2024-01-20", "2024-02-03"]

    def test_unknown_granularity(self, auth_client, seeded):
        response = auth_client.get("/api/v1/dashboard/revenue/?granularity=year")
        assert response.status_code == 400


class TestLeaderboard:
    def test_default_size(self, auth_client, seeded):
        body = auth_client.get("/api/v1/dashboard/leaderboard/").json()
        assert [(e["rank"], e["id"]) for e in body] == [(1, "d2"), (2, "d1"), (3, "d3")]

    def test_limit(self, auth_client, seeded):
        body = auth_client.get("/api/v1/dashboard/leaderboard/?limit=1").json()
        assert [e["id"] for e in body] == ["d2"]

    @pytest.mark.parametrize("limit", ["-1", "three"])
    def test_invalid_limit(self, auth_client, seeded, limit):
        response = auth_client.get(f"/api/v1/dashboard/leaderboard/?limit={limit}")
        assert response.status_code == 400


class TestRecentOrders:
    def test_recent_orders(self, auth_client, seeded, settings):
        settings.RECENT_ORDERS_LIMIT = 2
        body = auth_client.get("/api/v1/dashboard/recent-orders/").json()
        assert [o["id"] for o in body] == ["o3", "o2"]
        assert body[0]["customer_name"] == "Amira"
