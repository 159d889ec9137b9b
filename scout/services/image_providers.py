"""
Image Enricher - stock-photo providers with ordered fallback.

Each provider exposes one capability, fetch(query) -> Optional[str], and the
chain tries them in strict priority order, stopping at the first hit:

1. Pexels    (API key required, Authorization header)
2. Pixabay   (API key required, `key` query param)
3. Wikimedia Commons (no key; search a File: title, then resolve its URL)

Provider failures are never surfaced to the user. A provider that errors or
returns nothing simply lets the next one try; when all are exhausted the
caller keeps whatever image URL the model supplied, or none, in which case
the placeholder template is rendered.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"
PIXABAY_SEARCH_URL = "https://pixabay.com/api/"
WIKIMEDIA_API_URL = "https://commons.wikimedia.org/w/api.php"

# Wikimedia asks API clients to identify themselves
WIKIMEDIA_USER_AGENT = "GlobalGourmetScout/0.1 (https://github.com/global-gourmet-scout)"

PLACEHOLDER_TEMPLATE = "https://picsum.photos/seed/{seed}/800/600"


def placeholder_image_url(seed: str) -> str:
    """Deterministic placeholder image for a record with no image."""
    return PLACEHOLDER_TEMPLATE.format(seed=quote(seed or "restaurant", safe=""))


def city_image_query(city: str) -> str:
    return f"{city} city landmark"


def restaurant_image_query(name: str, cuisine: str) -> str:
    return " ".join(part for part in (name, cuisine, "restaurant") if part)


class ImageProvider(ABC):
    """A stock-photo source returning at most one image URL per query."""

    name: str = "provider"

    @abstractmethod
    async def fetch(self, query: str) -> Optional[str]:
        """Return one landscape image URL for the query, or None."""


class PexelsImageProvider(ImageProvider):
    """Pexels search API. Returns the large landscape rendition of the first photo."""

    name = "pexels"

    def __init__(self, http_client: httpx.AsyncClient, api_key: str):
        self.http_client = http_client
        self.api_key = api_key

    async def fetch(self, query: str) -> Optional[str]:
        if not self.api_key:
            return None

        response = await self.http_client.get(
            PEXELS_SEARCH_URL,
            params={"query": query, "per_page": 1, "orientation": "landscape"},
            headers={"Authorization": self.api_key},
        )
        response.raise_for_status()

        photos: List[Dict[str, Any]] = response.json().get("photos") or []
        if not photos:
            return None

        src = photos[0].get("src") or {}
        # Prefer high quality; fall back to any available
        for size in ("large2x", "landscape", "large", "original"):
            if src.get(size):
                return src[size]
        return None


class PixabayImageProvider(ImageProvider):
    """Pixabay search API. Returns largeImageURL of the first hit."""

    name = "pixabay"

    def __init__(self, http_client: httpx.AsyncClient, api_key: str):
        self.http_client = http_client
        self.api_key = api_key

    async def fetch(self, query: str) -> Optional[str]:
        if not self.api_key:
            return None

        response = await self.http_client.get(
            PIXABAY_SEARCH_URL,
            params={
                "key": self.api_key,
                "q": query,
                "image_type": "photo",
                "orientation": "horizontal",
                # Pixabay rejects per_page below 3
                "per_page": 3,
                "safesearch": "true",
            },
        )
        response.raise_for_status()

        hits: List[Dict[str, Any]] = response.json().get("hits") or []
        if not hits:
            return None
        return hits[0].get("largeImageURL") or hits[0].get("webformatURL")


class WikimediaImageProvider(ImageProvider):
    """
    Wikimedia Commons, credential-free.

    Two requests: full-text search in the File: namespace for a matching
    title, then imageinfo on that title for a direct (scaled) file URL.
    """

    name = "wikimedia"

    def __init__(self, http_client: httpx.AsyncClient, thumb_width: int = 1280):
        self.http_client = http_client
        self.thumb_width = thumb_width

    async def _api_get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.http_client.get(
            WIKIMEDIA_API_URL,
            params={"format": "json", "formatversion": 2, **params},
            headers={"User-Agent": WIKIMEDIA_USER_AGENT},
        )
        response.raise_for_status()
        return response.json()

    async def _search_file_title(self, query: str) -> Optional[str]:
        data = await self._api_get({
            "action": "query",
            "list": "search",
            "srsearch": f"{query} filetype:bitmap",
            "srnamespace": 6,
            "srlimit": 1,
        })
        results = (data.get("query") or {}).get("search") or []
        if not results:
            return None
        return results[0].get("title")

    async def _resolve_file_url(self, title: str) -> Optional[str]:
        data = await self._api_get({
            "action": "query",
            "titles": title,
            "prop": "imageinfo",
            "iiprop": "url",
            "iiurlwidth": self.thumb_width,
        })
        pages = (data.get("query") or {}).get("pages") or []
        # formatversion=2 returns a list; v1 returns a dict keyed by page id
        if isinstance(pages, dict):
            pages = list(pages.values())
        for page in pages:
            for info in page.get("imageinfo") or []:
                url = info.get("thumburl") or info.get("url")
                if url:
                    return url
        return None

    async def fetch(self, query: str) -> Optional[str]:
        title = await self._search_file_title(query)
        if not title:
            return None
        return await self._resolve_file_url(title)


class ImageProviderChain:
    """Ordered fallback over image providers; first non-empty result wins."""

    def __init__(self, providers: Sequence[ImageProvider]):
        self.providers = list(providers)

    async def fetch(self, query: str) -> Optional[str]:
        for provider in self.providers:
            try:
                url = await provider.fetch(query)
            except Exception as e:
                logger.warning(
                    f"Image provider '{provider.name}' failed for query='{query}': "
                    f"{type(e).__name__}: {e}"
                )
                continue

            if url:
                logger.debug(f"Image provider '{provider.name}' matched query='{query}'")
                return url

            logger.debug(f"Image provider '{provider.name}' returned no image for query='{query}'")

        logger.info(f"No image found for query='{query}' after {len(self.providers)} providers")
        return None


def build_image_chain(
    http_client: httpx.AsyncClient,
    pexels_key: str = "",
    pixabay_key: str = "",
) -> ImageProviderChain:
    """Default chain: Pexels -> Pixabay -> Wikimedia Commons."""
    return ImageProviderChain([
        PexelsImageProvider(http_client, pexels_key),
        PixabayImageProvider(http_client, pixabay_key),
        WikimediaImageProvider(http_client),
    ])
