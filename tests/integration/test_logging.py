import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_actor_bound_on_api_requests(self, auth_client, staff_user, caplog):
        with caplog.at_level(logging.INFO):
            auth_client.get("/api/v1/dashboard/summary/", HTTP_X_REQUEST_ID="actor-test")
        served = [
            record.getMessage()
            for record in caplog.records
            if "request.served" in record.getMessage()
        ]
        assert served
        assert f"'actor_id': '{staff_user.pk}'" in served[-1]

    def test_request_id_isolated_between_requests(self, client):
        first = client.get("/health")["X-Request-ID"]
        second = client.get("/health")["X-Request-ID"]
        assert first != second
