"""
Tests for POST /restaurants/search.

- Happy path: OK with camelCase keys and placeholder display images
- Failure paths: MISSING_CREDENTIAL / SEARCH_FAILED / PARSE_FAILED (HTTP 200)
- Validation: blank city, unsupported language -> 422
"""

from unittest.mock import patch

import pytest

from scout.config import settings
from scout.schemas.restaurants import CitySearchResponseError, CitySearchResponseOK, Restaurant

SEARCH_PATH = "scout.routes.search.search_city_restaurants"


@pytest.fixture
def ok_response():
    return CitySearchResponseOK(
        city="Lisbon",
        language="en",
        city_image_url="https://images.pexels.com/lisbon.jpg",
        restaurants=[
            Restaurant(
                id="lisbon-1",
                name="Cervejaria Ramiro",
                city="Lisbon",
                cuisine="Seafood",
                image_url="https://images.pexels.com/ramiro.jpg",
                rating=9.3,
            ),
            Restaurant(id="lisbon-2", name="Manteigaria", city="Lisbon", cuisine="Bakery"),
        ],
    )


class TestSearchEndpoint:

    def test_ok_response_shape(self, client, ok_response):
        with patch(SEARCH_PATH, return_value=ok_response) as mock_search:
            response = client.post("/restaurants/search", json={"city": "Lisbon", "language": "en"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["cityImageUrl"] == "https://images.pexels.com/lisbon.jpg"
        assert len(data["restaurants"]) == 2

        first, second = data["restaurants"]
        assert first["phoneNumber"] == "N/A"
        assert first["displayImageUrl"] == "https://images.pexels.com/ramiro.jpg"
        assert second["imageUrl"] is None
        assert second["displayImageUrl"].startswith("https://picsum.photos/seed/lisbon-2/")

        kwargs = mock_search.call_args.kwargs
        assert kwargs["city"] == "Lisbon"
        assert kwargs["language"] == "en"

    def test_language_defaults_to_english(self, client, ok_response):
        with patch(SEARCH_PATH, return_value=ok_response) as mock_search:
            client.post("/restaurants/search", json={"city": "Lisbon"})
        assert mock_search.call_args.kwargs["language"] == "en"

    def test_city_is_trimmed(self, client, ok_response):
        with patch(SEARCH_PATH, return_value=ok_response) as mock_search:
            client.post("/restaurants/search", json={"city": "  Lisbon  "})
        assert mock_search.call_args.kwargs["city"] == "Lisbon"

    @pytest.mark.parametrize("status,reason", [
        ("MISSING_CREDENTIAL", "A Gemini API key is required."),
        ("SEARCH_FAILED", "We couldn't retrieve the culinary secrets of that city. Please try again."),
        ("PARSE_FAILED", "We found results but couldn't read them. Please try again."),
    ])
    def test_error_statuses_return_200(self, client, status, reason):
        error = CitySearchResponseError(status=status, reason=reason)
        with patch(SEARCH_PATH, return_value=error):
            response = client.post("/restaurants/search", json={"city": "Lisbon"})

        assert response.status_code == 200
        assert response.json() == {"status": status, "reason": reason}

    def test_missing_key_end_to_end(self, client, env_keys):
        """No stored or environment key: no model call, setup prompt status."""
        env_keys(gemini="")
        with patch("scout.services.search_service.generate_grounded_text") as mock_generate:
            response = client.post("/restaurants/search", json={"city": "Lisbon"})

        assert response.status_code == 200
        assert response.json()["status"] == "MISSING_CREDENTIAL"
        mock_generate.assert_not_called()

    @pytest.mark.parametrize("payload", [
        {"city": ""},
        {"city": "   "},
        {},
        {"city": "Lisbon", "language": "de"},
        {"city": "x" * 101},
    ])
    def test_invalid_request_returns_422(self, client, payload):
        with patch(SEARCH_PATH) as mock_search:
            response = client.post("/restaurants/search", json=payload)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        mock_search.assert_not_called()


class TestHealthEndpoint:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "global-gourmet-scout"
        assert data["version"] == "0.1.0"
        assert data["storage_backend"] == settings.STORAGE_BACKEND
