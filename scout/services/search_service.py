"""
Restaurant Search Service - Gemini with Google Search grounding + image enrichment

Pipeline:
    Prompt Builder -> Model Client -> Response Sanitizer -> (parallel) Image Enricher

Concurrency:
- The city-image lookup starts immediately and runs while the model call is
  in flight (the city is known up front).
- Per-restaurant lookups need restaurant names, so they start after parsing
  and are gathered together with the city lookup.
- Each record's image is independent; a provider failure never affects
  another record or the search result.

Failure handling (no retries, every failure ends this one search):
- MISSING_CREDENTIAL: no Gemini key stored or configured, no network call made
- SEARCH_FAILED: transport/service failure or empty model text
- PARSE_FAILED: model text could not be turned into results
"""

import asyncio
import logging
from typing import Optional, Union

import httpx

from scout.agents.restaurant.parser import ResponseParseError, parse_city_search_result
from scout.agents.restaurant.prompts import build_restaurant_user_prompt, get_language_name
from scout.config import settings
from scout.schemas.restaurants import (
    CitySearchResponseError,
    CitySearchResponseOK,
    Restaurant,
)
from scout.services.image_providers import (
    ImageProviderChain,
    build_image_chain,
    city_image_query,
    restaurant_image_query,
)
from scout.services.model_client import (
    MissingCredentialError,
    ModelServiceError,
    generate_grounded_text,
)
from scout.services.storage import StorageService
from scout.utils.constants import STORAGE_KEYS

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = (
    "A Gemini API key is required. Add your key in Settings > Configure Keys."
)
SEARCH_FAILED_MESSAGE = (
    "We couldn't retrieve the culinary secrets of that city. Please try again."
)
PARSE_FAILED_MESSAGE = (
    "We found results but couldn't read them. Please try again."
)

CitySearchResponse = Union[CitySearchResponseOK, CitySearchResponseError]


def resolve_api_key(storage: StorageService, storage_key: str, fallback: str) -> str:
    """A key saved by the user wins over the environment configuration."""
    return storage.get_api_key(storage_key) or fallback


async def _enrich_restaurant(chain: ImageProviderChain, restaurant: Restaurant) -> Restaurant:
    url = await chain.fetch(restaurant_image_query(restaurant.name, restaurant.cuisine))
    if not url:
        # Keep whatever the model supplied (possibly nothing)
        return restaurant
    return restaurant.model_copy(update={"image_url": url})


async def search_city_restaurants(
    city: str,
    language: str,
    storage: StorageService,
    http_client: httpx.AsyncClient,
    image_chain: Optional[ImageProviderChain] = None,
) -> CitySearchResponse:
    """
    Find the top 3 viral restaurants in a city and attach images.

    Args:
        city: City name typed by the user
        language: Result language code (en, zh, fr, es, ja)
        storage: Storage service holding user-saved API keys
        http_client: Shared async HTTP client for image providers
        image_chain: Provider chain override (defaults to Pexels -> Pixabay -> Wikimedia)

    Returns:
        CitySearchResponseOK or CitySearchResponseError
    """
    city = city.strip()
    logger.info(f"search_city_restaurants called for city='{city}', language={language}")

    gemini_key = resolve_api_key(storage, STORAGE_KEYS['GEMINI_KEY'], settings.GOOGLE_API_KEY)
    if not gemini_key:
        logger.warning("Search aborted: no Gemini API key stored or configured")
        return CitySearchResponseError(status="MISSING_CREDENTIAL", reason=MISSING_CREDENTIAL_MESSAGE)

    if image_chain is None:
        image_chain = build_image_chain(
            http_client,
            pexels_key=resolve_api_key(storage, STORAGE_KEYS['PEXELS_KEY'], settings.PEXELS_API_KEY),
            pixabay_key=resolve_api_key(storage, STORAGE_KEYS['PIXABAY_KEY'], settings.PIXABAY_API_KEY),
        )

    prompt = build_restaurant_user_prompt(city, get_language_name(language))

    # City image does not depend on the model output
    city_image_task = asyncio.create_task(image_chain.fetch(city_image_query(city)))

    try:
        try:
            text = await generate_grounded_text(prompt, api_key=gemini_key)
            result = parse_city_search_result(text, city)
        except MissingCredentialError:
            return CitySearchResponseError(status="MISSING_CREDENTIAL", reason=MISSING_CREDENTIAL_MESSAGE)
        except ModelServiceError as e:
            logger.error(f"Search failed for city='{city}': {e}")
            return CitySearchResponseError(status="SEARCH_FAILED", reason=SEARCH_FAILED_MESSAGE)
        except ResponseParseError as e:
            logger.error(f"Could not parse model output for city='{city}': {e}")
            return CitySearchResponseError(status="PARSE_FAILED", reason=PARSE_FAILED_MESSAGE)

        enriched = await asyncio.gather(
            *(_enrich_restaurant(image_chain, r) for r in result.restaurants)
        )
        city_image_url = await city_image_task
    finally:
        # The city lookup never outlives this search, whatever ended it
        if not city_image_task.done():
            city_image_task.cancel()

    logger.info(f"Returning {len(enriched)} restaurants for city='{city}'")

    return CitySearchResponseOK(
        city=city,
        language=language,
        city_image_url=city_image_url or result.city_image_url,
        restaurants=list(enriched),
    )
