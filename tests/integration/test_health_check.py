import pytest

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_store_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["document_store"]["status"] == "up"
        assert "response_time_ms" in data["services"]["document_store"]

    def test_health_check_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200
