"""
FastAPI dependency functions for shared resources.

The storage service and the HTTP client are created once in the app
lifespan (see scout/main.py) and handed to route handlers through these
dependencies, so no component reaches for global state directly. Tests
replace them with app.dependency_overrides.
"""

import httpx
from fastapi import Depends, Request

from scout.services.favorites_service import FavoritesService
from scout.services.storage import StorageService


def get_storage_service(request: Request) -> StorageService:
    """Storage service created at startup."""
    return request.app.state.storage


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared async HTTP client created at startup."""
    return request.app.state.http_client


def get_favorites_service(
    storage: StorageService = Depends(get_storage_service),
) -> FavoritesService:
    """Favorites bound to the injected storage service."""
    return FavoritesService(storage)
