"""
Restaurant Search - Web-Grounded LLM Architecture

This module contains the prompt templates and the response sanitizer for the
Gemini-based restaurant search.

Architecture:
- Pattern: Web-Grounded LLM (single API call with Google Search tool)
- Model: Gemini 2.5 Flash (with Google Search grounding)
- Output: JSON recovered from free text by the sanitizer

The service layer is in:
- scout/services/search_service.py
"""

from scout.agents.restaurant.parser import (
    ResponseParseError,
    extract_json_payload,
    parse_city_search_result,
)
from scout.agents.restaurant.prompts import (
    RESTAURANT_SYSTEM_PROMPT,
    build_restaurant_user_prompt,
    get_language_name,
)

__all__ = [
    "RESTAURANT_SYSTEM_PROMPT",
    "ResponseParseError",
    "build_restaurant_user_prompt",
    "extract_json_payload",
    "get_language_name",
    "parse_city_search_result",
]
