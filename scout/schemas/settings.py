"""
Pydantic schemas for settings endpoints (API keys, languages).

Raw keys are accepted on write but never returned; reads only report
whether a key is configured and a masked preview.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ApiKeysUpdateRequest(BaseModel):
    """
    Request to save API keys.

    - Omitted field (null): leave that key unchanged
    - Empty string: remove the saved key
    """
    gemini_api_key: Optional[str] = Field(
        None,
        description="Gemini API key (required for searches)",
        max_length=200,
        examples=["AIzaSy..."]
    )
    pexels_api_key: Optional[str] = Field(
        None,
        description="Pexels API key (optional, improves images)",
        max_length=200
    )
    pixabay_api_key: Optional[str] = Field(
        None,
        description="Pixabay API key (optional, improves images)",
        max_length=200
    )


class ApiKeyStatus(BaseModel):
    """Whether one key is usable, and where it comes from."""
    name: Literal["gemini", "pexels", "pixabay"]
    configured: bool
    source: Optional[Literal["stored", "environment"]] = Field(
        None,
        description="'stored' for keys saved through the API, 'environment' for .env keys"
    )
    preview: str = Field(
        default="",
        description="Masked key preview, e.g. '********9xQk'"
    )
    required: bool = False


class ApiKeysStatusResponse(BaseModel):
    """Response model for GET/PUT /settings/api-keys."""
    keys: List[ApiKeyStatus]
    ready_to_search: bool = Field(
        ...,
        description="True when a Gemini key is available"
    )


class LanguageOption(BaseModel):
    code: str = Field(..., examples=["fr"])
    name: str = Field(..., examples=["French"])


class LanguagesResponse(BaseModel):
    """Response model for GET /settings/languages."""
    default: str
    languages: List[LanguageOption]
