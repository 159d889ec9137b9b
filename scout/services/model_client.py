"""
Model Client - Gemini with Google Search grounding.

Sends one prompt to Gemini with the Google Search tool enabled and returns
the raw response text. Parsing is NOT done here (see
scout/agents/restaurant/parser.py).

IMPORTANT: Google Search grounding doesn't support
response_mime_type='application/json' or response_schema. The prompt asks
for JSON and the sanitizer recovers it from the text.

Error conditions:
- Missing API key      -> MissingCredentialError (before any network call)
- SDK / network error  -> ModelServiceError
- Empty text           -> ModelServiceError

Nothing is retried: a failed call ends that search attempt.
"""

import logging
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from scout.agents.restaurant.prompts import RESTAURANT_SYSTEM_PROMPT
from scout.config import settings

logger = logging.getLogger(__name__)

# Clients are created lazily, one per API key
_gemini_clients: Dict[str, genai.Client] = {}


class MissingCredentialError(RuntimeError):
    """No Gemini API key is stored or configured."""


class ModelServiceError(RuntimeError):
    """The model call failed or produced no text."""


def _get_gemini_client(api_key: str) -> genai.Client:
    """Lazy initialization of a Gemini client for the given key."""
    client = _gemini_clients.get(api_key)
    if client is None:
        client = genai.Client(api_key=api_key)
        _gemini_clients[api_key] = client
        logger.info("Gemini client initialized for restaurant search")
    return client


def _extract_grounding_info(response) -> Dict[str, Any]:
    """Extract grounding metadata (search queries, source URLs) for logging."""
    grounding_info: Dict[str, Any] = {
        "web_search_queries": [],
        "source_urls": [],
    }

    try:
        if response.candidates and len(response.candidates) > 0:
            candidate = response.candidates[0]
            metadata = getattr(candidate, 'grounding_metadata', None)
            if metadata:
                if getattr(metadata, 'web_search_queries', None):
                    grounding_info["web_search_queries"] = list(metadata.web_search_queries)

                for chunk in getattr(metadata, 'grounding_chunks', None) or []:
                    web = getattr(chunk, 'web', None)
                    if web:
                        grounding_info["source_urls"].append({
                            "title": getattr(web, 'title', "") or "",
                            "uri": getattr(web, 'uri', "") or "",
                        })
    except Exception as e:
        logger.warning(f"Error extracting grounding info: {e}")

    return grounding_info


def _extract_text(response) -> Optional[str]:
    """
    Get the response text, preferring the first candidate's text parts.

    The response.text property can be None even when parts carry text.
    """
    if response.candidates:
        candidate = response.candidates[0]
        content = getattr(candidate, 'content', None)
        if content and content.parts:
            texts = [part.text for part in content.parts if getattr(part, 'text', None)]
            if texts:
                return "".join(texts)

    return response.text


async def generate_grounded_text(
    prompt: str,
    api_key: str,
    model: Optional[str] = None,
    system_instruction: str = RESTAURANT_SYSTEM_PROMPT,
) -> str:
    """
    Call Gemini with the Google Search tool and return the raw text.

    Args:
        prompt: Fully built user prompt
        api_key: Gemini API key (stored by the user or from the environment)
        model: Model id, defaults to settings.GEMINI_MODEL
        system_instruction: System prompt

    Returns:
        Raw model text, expected to contain one JSON object

    Raises:
        MissingCredentialError: If api_key is empty
        ModelServiceError: If the call fails or returns no text
    """
    if not api_key:
        raise MissingCredentialError("Gemini API key is missing")

    model = model or settings.GEMINI_MODEL
    client = _get_gemini_client(api_key)

    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=settings.GEMINI_TEMPERATURE,
        tools=[
            types.Tool(google_search=types.GoogleSearch())
        ],
    )

    logger.info(f"Calling Gemini ({model}) with Google Search grounding...")
    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
    except Exception as e:
        logger.error(f"Error calling Gemini API: {type(e).__name__}: {e}")
        raise ModelServiceError(f"Gemini request failed: {e}") from e

    grounding_info = _extract_grounding_info(response)
    if grounding_info["web_search_queries"]:
        logger.info(f"Web search queries: {grounding_info['web_search_queries']}")
    if grounding_info["source_urls"]:
        logger.info(f"Found {len(grounding_info['source_urls'])} source URLs")

    text = _extract_text(response)
    if not text or not text.strip():
        logger.error("Empty text in Gemini response")
        raise ModelServiceError("No content generated")

    return text
