"""
Pytest configuration for Global Gourmet Scout backend tests.

Sets up test environment and global fixtures.
"""
import os

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from scout.config import settings  # noqa: E402
from scout.schemas.restaurants import Restaurant  # noqa: E402
from scout.services.storage import InMemoryKeyValueStore, StorageService  # noqa: E402


@pytest.fixture
def storage():
    """Fresh in-memory storage service."""
    return StorageService(InMemoryKeyValueStore())


@pytest.fixture
def env_keys(monkeypatch):
    """
    Pin the environment-level API keys so tests don't depend on a local .env.

    Returns a setter: env_keys(gemini="...", pexels="...", pixabay="...").
    """
    def _set(gemini: str = "", pexels: str = "", pixabay: str = ""):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", gemini)
        monkeypatch.setattr(settings, "PEXELS_API_KEY", pexels)
        monkeypatch.setattr(settings, "PIXABAY_API_KEY", pixabay)

    _set(gemini="test-google-api-key")
    return _set


@pytest.fixture
def sample_restaurant():
    return Restaurant(
        id="lisbon-1",
        name="Cervejaria Ramiro",
        city="Lisbon",
        cuisine="Seafood",
        address="Av. Almirante Reis 1, 1150-007 Lisboa",
        phone_number="+351 21 885 1024",
        map_url="https://maps.google.com/?q=Cervejaria+Ramiro",
        rating=9.3,
        review_summary="Legendary garlic prawns and a buzzing room.",
        tags=["seafood", "iconic"],
    )
