"""
Response Sanitizer for search-grounded model output.

The Google Search tool cannot be combined with response_schema, so the model
returns free text that is *expected* to contain one JSON object. This module
recovers that object with a narrow contract:

    arbitrary text in -> parsed dict out, or ResponseParseError

It knows nothing about the network call that produced the text.
"""

import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from scout.schemas.restaurants import CitySearchResult, Restaurant
from scout.utils.constants import MAX_RESTAURANTS

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r'^```(?:json)?\s*', re.IGNORECASE)
_TRAILING_FENCE = re.compile(r'\s*```$')
_CONTROL_CHARS = re.compile(r'[\x00-\x1f]')
_TRAILING_COMMA = re.compile(r',(\s*[}\]])')


class ResponseParseError(ValueError):
    """The model output could not be turned into a search result."""


def _slice_json_object(text: str) -> str:
    """Slice from the first '{' to the last '}', or strip code fences."""
    start = text.find('{')
    end = text.rfind('}')
    if start != -1 and end > start:
        return text[start:end + 1]

    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub('', cleaned)
    cleaned = _TRAILING_FENCE.sub('', cleaned)
    return cleaned


def extract_json_payload(text: str) -> Dict[str, Any]:
    """
    Recover a JSON object from raw model text.

    Steps:
    1. Slice between the outermost braces (handles prose and fences around JSON)
    2. Without braces, strip leading/trailing ``` / ```json markers instead
    3. Replace control characters (< 0x20) with spaces; models often emit raw
       newlines inside string literals
    4. Parse; on failure retry once with trailing commas removed

    Raises:
        ResponseParseError: If no JSON object can be parsed
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty model output")

    json_content = _slice_json_object(text)
    json_content = _CONTROL_CHARS.sub(' ', json_content)

    try:
        payload = json.loads(json_content)
    except json.JSONDecodeError as first_error:
        # Remove trailing commas before } or ] (common LLM mistake)
        try:
            payload = json.loads(_TRAILING_COMMA.sub(r'\1', json_content))
        except json.JSONDecodeError:
            logger.error(f"Failed to parse JSON response: {first_error}")
            logger.debug(f"Raw content: {text[:500]}")
            raise ResponseParseError(f"Invalid JSON in model output: {first_error}") from first_error

    if not isinstance(payload, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    return payload


def _city_slug(city: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', city.lower()).strip('-')
    return slug or "city"


def parse_city_search_result(text: str, city: str) -> CitySearchResult:
    """
    Parse raw model text into a CitySearchResult.

    Missing restaurant ids are assigned as "<city-slug>-<rank>" and a missing
    city is filled with the searched city. Anything beyond three restaurants
    is dropped.

    Null or unreadable detail fields fall back to their defaults (an
    unreadable rating scores 0). Only the record shape itself is fatal.

    Raises:
        ResponseParseError: If the JSON is unusable, lacks a restaurants list,
            or a restaurant is not an object or has no name
    """
    payload = extract_json_payload(text)

    raw_restaurants = payload.get("restaurants")
    if not isinstance(raw_restaurants, list):
        logger.error("Model response missing 'restaurants' list")
        raise ResponseParseError("Model response is missing the 'restaurants' list")

    if len(raw_restaurants) > MAX_RESTAURANTS:
        logger.warning(
            f"Model returned {len(raw_restaurants)} restaurants, keeping the first {MAX_RESTAURANTS}"
        )
        raw_restaurants = raw_restaurants[:MAX_RESTAURANTS]

    restaurants = []
    for rank, raw in enumerate(raw_restaurants, start=1):
        if not isinstance(raw, dict):
            raise ResponseParseError(f"Restaurant {rank} is not a JSON object")

        record = dict(raw)
        if not str(record.get("id") or "").strip():
            record["id"] = f"{_city_slug(city)}-{rank}"
        else:
            record["id"] = str(record["id"])
        if not record.get("city"):
            record["city"] = city

        try:
            restaurants.append(Restaurant.model_validate(record))
        except ValidationError as e:
            logger.error(f"Restaurant {rank} failed validation: {e.error_count()} errors")
            raise ResponseParseError(f"Restaurant {rank} is malformed") from e

    return CitySearchResult(
        city_image_url=payload.get("cityImageUrl") or None,
        restaurants=restaurants,
    )
