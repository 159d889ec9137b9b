"""
Pydantic schemas for restaurant search endpoints.

These models define the request/response contracts for the search flow
powered by Gemini with Google Search grounding. Wire keys are camelCase
(matching what the model is asked to return); Python attributes are
snake_case.
"""

import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from scout.services.image_providers import placeholder_image_url
from scout.utils.constants import DEFAULT_LANGUAGE, LANGUAGE_NAMES

LanguageCode = Literal["en", "zh", "fr", "es", "ja"]

_LEADING_NUMBER = re.compile(r'\d+(?:[.,]\d+)?')


# ============================================================================
# DOMAIN MODELS
# ============================================================================

class Restaurant(BaseModel):
    """
    A single restaurant recommendation.

    Created fresh on every search response and never mutated afterwards,
    except for attaching an image URL during enrichment.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        ...,
        description="Opaque identifier assigned by the model (or by the service when missing)",
        min_length=1,
        examples=["lisbon-1", "time-out-market"]
    )
    name: str = Field(..., min_length=1, examples=["Cervejaria Ramiro"])
    city: str = Field(default="", examples=["Lisbon"])
    cuisine: str = Field(default="", examples=["Seafood"])
    address: str = Field(default="", examples=["Av. Almirante Reis 1, 1150-007 Lisboa"])
    phone_number: str = Field(default="N/A", alias="phoneNumber")
    map_url: str = Field(default="", alias="mapUrl")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    rating: float = Field(
        default=0.0,
        description="Score based on user sentiment, nominally 1-10 (not enforced)",
        examples=[9.2]
    )
    review_summary: str = Field(default="", alias="reviewSummary")
    tags: List[str] = Field(default_factory=list, examples=[["seafood", "iconic"]])

    @field_validator("city", "cuisine", "address", "map_url", "review_summary", mode="before")
    @classmethod
    def null_text_to_empty(cls, value):
        """The model sends null for details it could not find."""
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("rating", mode="before")
    @classmethod
    def coerce_rating(cls, value):
        """Accept "9.1", "9/10" or "8.7 stars"; anything unreadable scores 0."""
        if isinstance(value, bool) or value is None:
            return 0.0
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            match = _LEADING_NUMBER.search(value)
            if match:
                return float(match.group(0).replace(",", "."))
        return 0.0

    @field_validator("website_url", "image_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, value):
        """The model often sends "" or "N/A" instead of omitting a URL."""
        if isinstance(value, str) and value.strip().lower() in ("", "n/a", "null", "none"):
            return None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        if isinstance(value, list):
            return [str(tag) for tag in value if tag is not None and str(tag).strip()]
        return []

    @field_validator("phone_number", mode="before")
    @classmethod
    def coerce_phone(cls, value):
        if value is None or value == "":
            return "N/A"
        return str(value)

    @computed_field(alias="displayImageUrl")
    @property
    def display_image_url(self) -> str:
        """Image to render: the attached image or a deterministic placeholder."""
        if self.image_url:
            return self.image_url
        return placeholder_image_url(self.id or self.name)


class CitySearchResult(BaseModel):
    """City banner image plus up to three restaurants. Transient."""
    model_config = ConfigDict(populate_by_name=True)

    city_image_url: Optional[str] = Field(default=None, alias="cityImageUrl")
    restaurants: List[Restaurant] = Field(default_factory=list)

    @field_validator("city_image_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ============================================================================
# REQUEST MODELS
# ============================================================================

class CitySearchRequest(BaseModel):
    """
    Request to find the top viral restaurants in a city.

    Frontend scenarios:
    - User types a city in the search bar and submits
    - User changes result language in settings and searches again
    """
    city: str = Field(
        ...,
        description="City name as typed by the user",
        min_length=1,
        max_length=100,
        examples=["Lisbon", "Kyoto", "New York"]
    )
    language: LanguageCode = Field(
        default=DEFAULT_LANGUAGE,
        description=f"Result language, one of: {', '.join(LANGUAGE_NAMES)}",
        examples=["en", "fr"]
    )

    @field_validator("city")
    @classmethod
    def city_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("city must not be blank")
        return value


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class CitySearchResponseOK(BaseModel):
    """Successful search with enriched results."""
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["OK"] = Field(default="OK")
    city: str
    language: LanguageCode
    city_image_url: Optional[str] = Field(default=None, alias="cityImageUrl")
    restaurants: List[Restaurant]


class CitySearchResponseError(BaseModel):
    """
    Search failed. Every failure is scoped to this one search; the user
    re-invokes the search to try again.

    - MISSING_CREDENTIAL: no Gemini key stored or configured (setup prompt)
    - SEARCH_FAILED: transport or model service failure
    - PARSE_FAILED: model output could not be turned into results
    """
    status: Literal["MISSING_CREDENTIAL", "SEARCH_FAILED", "PARSE_FAILED"]
    reason: str = Field(
        ...,
        description="User-facing message",
        examples=["We couldn't retrieve the culinary secrets of that city. Please try again."]
    )
