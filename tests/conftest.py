import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from tests.stores import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def staff_user():
    return get_user_model().objects.create_user(
        username="dispatcher", password="testpass123"
    )


@pytest.fixture()
def auth_client(staff_user):
    """APIClient with a force-authenticated staff member."""
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture()
def memory_store():
    return InMemoryDocumentStore()
