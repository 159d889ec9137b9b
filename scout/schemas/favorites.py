"""
Pydantic schemas for favorites endpoints.

Favorites are Restaurant snapshots persisted in the key-value storage,
independent of any live search.
"""

from typing import List

from pydantic import BaseModel, Field

from scout.schemas.restaurants import Restaurant


class FavoritesListResponse(BaseModel):
    """Response model for GET /favorites."""
    favorites: List[Restaurant] = Field(
        default_factory=list,
        description="Saved restaurants in the order they were added"
    )
    count: int = Field(..., ge=0, description="Number of saved restaurants")


class FavoriteToggleResponse(BaseModel):
    """Response model for POST /favorites/toggle."""
    restaurant_id: str = Field(..., description="Id of the toggled restaurant")
    is_favorite: bool = Field(
        ...,
        description="True if the restaurant is saved after the toggle"
    )
    count: int = Field(..., ge=0, description="Number of saved restaurants after the toggle")
