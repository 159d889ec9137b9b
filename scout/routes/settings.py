"""
FastAPI routes for app settings.

Endpoints:
- GET /settings/api-keys: Which API keys are configured (never the raw keys)
- PUT /settings/api-keys: Save or clear user API keys
- GET /settings/languages: Supported result languages
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from scout.config import settings
from scout.dependencies import get_storage_service
from scout.schemas.settings import (
    ApiKeysStatusResponse,
    ApiKeysUpdateRequest,
    ApiKeyStatus,
    LanguageOption,
    LanguagesResponse,
)
from scout.services.storage import StorageService
from scout.utils.constants import DEFAULT_LANGUAGE, LANGUAGE_NAMES, STORAGE_KEYS
from scout.utils.logging import mask_secret

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["settings"]
)


def _key_status(storage: StorageService) -> ApiKeysStatusResponse:
    entries = [
        ("gemini", STORAGE_KEYS['GEMINI_KEY'], settings.GOOGLE_API_KEY, True),
        ("pexels", STORAGE_KEYS['PEXELS_KEY'], settings.PEXELS_API_KEY, False),
        ("pixabay", STORAGE_KEYS['PIXABAY_KEY'], settings.PIXABAY_API_KEY, False),
    ]

    keys: List[ApiKeyStatus] = []
    for name, storage_key, env_value, required in entries:
        stored = storage.get_api_key(storage_key)
        if stored:
            keys.append(ApiKeyStatus(
                name=name, configured=True, source="stored",
                preview=mask_secret(stored), required=required,
            ))
        elif env_value:
            keys.append(ApiKeyStatus(
                name=name, configured=True, source="environment",
                preview=mask_secret(env_value), required=required,
            ))
        else:
            keys.append(ApiKeyStatus(name=name, configured=False, required=required))

    return ApiKeysStatusResponse(keys=keys, ready_to_search=keys[0].configured)


@router.get(
    "/api-keys",
    response_model=ApiKeysStatusResponse,
    status_code=200,
    summary="Get API key configuration status",
)
async def get_api_keys_endpoint(
    storage: StorageService = Depends(get_storage_service),
) -> ApiKeysStatusResponse:
    logger.info("GET /settings/api-keys called")
    return _key_status(storage)


@router.put(
    "/api-keys",
    response_model=ApiKeysStatusResponse,
    status_code=200,
    summary="Save API keys",
    description="""
    Saves the provided keys (trimmed). An empty string removes a saved key;
    an omitted field leaves it unchanged.

    Saved keys are base64-obfuscated in storage. This is NOT encryption:
    it only keeps keys from being readable at a glance.
    """
)
async def update_api_keys_endpoint(
    request: ApiKeysUpdateRequest,
    storage: StorageService = Depends(get_storage_service),
) -> ApiKeysStatusResponse:
    logger.info("PUT /settings/api-keys called")

    updates = {
        STORAGE_KEYS['GEMINI_KEY']: request.gemini_api_key,
        STORAGE_KEYS['PEXELS_KEY']: request.pexels_api_key,
        STORAGE_KEYS['PIXABAY_KEY']: request.pixabay_api_key,
    }
    for storage_key, value in updates.items():
        if value is not None:
            storage.save_api_key(storage_key, value)

    return _key_status(storage)


@router.get(
    "/languages",
    response_model=LanguagesResponse,
    status_code=200,
    summary="List supported result languages",
)
async def get_languages_endpoint() -> LanguagesResponse:
    return LanguagesResponse(
        default=DEFAULT_LANGUAGE,
        languages=[LanguageOption(code=code, name=name) for code, name in LANGUAGE_NAMES.items()],
    )
