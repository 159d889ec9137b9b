"""
FastAPI routes for the restaurant search.

Endpoints:
- POST /restaurants/search: Top 3 viral restaurants for a city
"""

import logging
from typing import Union

import httpx
from fastapi import APIRouter, Depends

from scout.dependencies import get_http_client, get_storage_service
from scout.schemas.restaurants import (
    CitySearchRequest,
    CitySearchResponseError,
    CitySearchResponseOK,
)
from scout.services.search_service import search_city_restaurants
from scout.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/restaurants",
    tags=["restaurants"]
)

# Union type for response models (FastAPI will select correct one based on status)
CitySearchResponse = Union[CitySearchResponseOK, CitySearchResponseError]


@router.post(
    "/search",
    response_model=CitySearchResponse,
    status_code=200,
    summary="Find the top viral restaurants in a city",
    description="""
    Asks Gemini (with Google Search grounding) for the three most viral
    restaurants in the city, then attaches images from Pexels, Pixabay or
    Wikimedia Commons.

    **Responses (always HTTP 200, check `status`):**
    - OK: `cityImageUrl` plus up to 3 restaurants
    - MISSING_CREDENTIAL: no Gemini key; prompt the user to configure keys
    - SEARCH_FAILED: the model service could not be reached; user may retry
    - PARSE_FAILED: the model answer was unreadable; user may retry

    Nothing is retried automatically. A new search supersedes a previous
    one on the client side; stale responses should be discarded there.
    """
)
async def search_restaurants_endpoint(
    request: CitySearchRequest,
    storage: StorageService = Depends(get_storage_service),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> CitySearchResponse:
    """
    - Parse/Validate: Handled by Pydantic CitySearchRequest
    - Call LLM + enrich: Service layer
    - Map output: Service layer returns typed response models
    """
    logger.info(f"POST /restaurants/search called, city='{request.city}', language={request.language}")

    response = await search_city_restaurants(
        city=request.city,
        language=request.language,
        storage=storage,
        http_client=http_client,
    )

    logger.info(f"Returning response with status={response.status}")
    return response
