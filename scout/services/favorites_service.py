"""
Favorites service.

The favorites collection is a list of Restaurant snapshots keyed by id,
serialized as JSON under the "favorites" storage key. It lives
independently of any search: a favorite keeps its snapshot even after the
next search replaces the results.
"""

import json
import logging
from typing import List

from pydantic import ValidationError

from scout.schemas.restaurants import Restaurant
from scout.services.storage import StorageService
from scout.utils.constants import STORAGE_KEYS

logger = logging.getLogger(__name__)

FAVORITES_KEY = STORAGE_KEYS['FAVORITES']


class FavoritesService:
    """Read and mutate the persisted favorites collection."""

    def __init__(self, storage: StorageService):
        self.storage = storage

    def _save(self, favorites: List[Restaurant]) -> None:
        payload = [
            f.model_dump(mode="json", by_alias=True, exclude={"display_image_url"})
            for f in favorites
        ]
        self.storage.set_item(FAVORITES_KEY, json.dumps(payload, ensure_ascii=False))

    def list_favorites(self) -> List[Restaurant]:
        """
        Return saved favorites in insertion order.

        A corrupt stored value is logged and treated as an empty collection.
        """
        raw = self.storage.get_item(FAVORITES_KEY)
        if not raw:
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Stored favorites are not valid JSON, ignoring them: {e}")
            return []

        if not isinstance(records, list):
            logger.error("Stored favorites are not a list, ignoring them")
            return []

        favorites: List[Restaurant] = []
        for record in records:
            try:
                favorites.append(Restaurant.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping malformed favorite: {e.error_count()} errors")
        return favorites

    def is_favorite(self, restaurant_id: str) -> bool:
        return any(f.id == restaurant_id for f in self.list_favorites())

    def toggle_favorite(self, restaurant: Restaurant) -> bool:
        """
        Remove the restaurant if saved, add a snapshot otherwise.

        Returns:
            True if the restaurant is a favorite after the call
        """
        favorites = self.list_favorites()

        if any(f.id == restaurant.id for f in favorites):
            self._save([f for f in favorites if f.id != restaurant.id])
            logger.info(f"Removed favorite restaurant_id={restaurant.id}")
            return False

        favorites.append(restaurant.model_copy(deep=True))
        self._save(favorites)
        logger.info(f"Added favorite restaurant_id={restaurant.id}")
        return True

    def remove_favorite(self, restaurant_id: str) -> bool:
        """Remove by id. Returns False if it was not a favorite."""
        favorites = self.list_favorites()
        remaining = [f for f in favorites if f.id != restaurant_id]
        if len(remaining) == len(favorites):
            logger.warning(f"Favorite restaurant_id={restaurant_id} not found")
            return False

        self._save(remaining)
        logger.info(f"Removed favorite restaurant_id={restaurant_id}")
        return True

    def clear_favorites(self) -> None:
        self.storage.remove_item(FAVORITES_KEY)
        logger.info("Cleared all favorites")
