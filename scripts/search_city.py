#!/usr/bin/env python3
"""
Restaurant Search Test Script

Runs the full search pipeline (Gemini with Google Search grounding, then
Pexels -> Pixabay -> Wikimedia image enrichment) locally, without starting
the API server or the mobile app.

Usage:
    python scripts/search_city.py
    python scripts/search_city.py --city Lisbon
    python scripts/search_city.py --city Kyoto --language ja --json
"""

import argparse
import asyncio
import json
import logging
import os
import sys

import httpx

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scout.config import settings
from scout.schemas.restaurants import CitySearchResponseOK
from scout.services.search_service import search_city_restaurants
from scout.services.storage import InMemoryKeyValueStore, StorageService
from scout.utils.constants import LANGUAGE_NAMES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_result(result):
    """Pretty print the search result."""
    print("\n" + "=" * 60)
    print(f"STATUS: {result.status}")
    print("=" * 60)

    if isinstance(result, CitySearchResponseOK):
        print(f"\nCity image: {result.city_image_url or '(none)'}")
        print(f"\n✅ Found {len(result.restaurants)} restaurant(s) in {result.city}:\n")

        for i, restaurant in enumerate(result.restaurants, 1):
            print(f"--- #{i} {restaurant.name} ---")
            print(f"  Cuisine:   {restaurant.cuisine}")
            print(f"  Rating:    {restaurant.rating}/10")
            print(f"  Address:   {restaurant.address}")
            print(f"  Phone:     {restaurant.phone_number}")
            print(f"  Maps:      {restaurant.map_url}")
            if restaurant.website_url:
                print(f"  Website:   {restaurant.website_url}")
            print(f"  Image:     {restaurant.display_image_url}")
            print(f"  Reviews:   {restaurant.review_summary}")
            print(f"  Tags:      {', '.join(restaurant.tags)}")
            print()
    else:
        print(f"\n❌ Search failed")
        print(f"  Reason: {result.reason}\n")


async def run_search(city: str, language: str, as_json: bool = False):
    """Run a single search against the real services."""
    if not settings.GOOGLE_API_KEY:
        print("\n⚠️  ERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        print("\n   Get your API key at: https://aistudio.google.com/app/apikey")
        return None

    if not as_json:
        print("\n" + "=" * 60)
        print("RESTAURANT SEARCH (Gemini with Google Search)")
        print("=" * 60)
        print(f"\nCity:     {city}")
        print(f"Language: {LANGUAGE_NAMES[language]}")
        print("\nCalling Gemini API (with Google Search grounding)...")

    # Keys come from the environment only; nothing is persisted
    storage = StorageService(InMemoryKeyValueStore())

    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        result = await search_city_restaurants(
            city=city,
            language=language,
            storage=storage,
            http_client=http_client,
        )

    if as_json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    else:
        print_result(result)

    return result


def city_name(value: str) -> str:
    """argparse type: a trimmed, non-blank city name."""
    value = value.strip()
    if not value:
        raise argparse.ArgumentTypeError("city must not be blank")
    if len(value) > 100:
        raise argparse.ArgumentTypeError("city must be at most 100 characters")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Test the restaurant search pipeline locally"
    )
    parser.add_argument(
        "--city", "-c",
        type=city_name,
        default="Lisbon",
        help="City to search (default: Lisbon)"
    )
    parser.add_argument(
        "--language", "-l",
        type=str,
        choices=sorted(LANGUAGE_NAMES),
        default="en",
        help="Result language (default: en)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON response"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main():
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    asyncio.run(run_search(city=args.city, language=args.language, as_json=args.json))


if __name__ == "__main__":
    main()
