"""
Shared fixtures for route tests.

The app lifespan is not started; storage and the HTTP client are injected
through app.dependency_overrides instead.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from scout.dependencies import get_http_client, get_storage_service
from scout.main import app


@pytest.fixture
def client(storage):
    """Test client bound to a fresh in-memory storage service."""
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(404))
    )

    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_http_client] = lambda: http_client

    yield TestClient(app)

    # Clean up after test
    app.dependency_overrides.clear()
