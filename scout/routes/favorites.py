"""
FastAPI routes for the favorites collection.

Endpoints:
- GET /favorites: List saved restaurants
- POST /favorites/toggle: Save or unsave a restaurant snapshot
- DELETE /favorites/{restaurant_id}: Unsave by id
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from scout.dependencies import get_favorites_service
from scout.schemas.favorites import FavoritesListResponse, FavoriteToggleResponse
from scout.schemas.restaurants import Restaurant
from scout.services.favorites_service import FavoritesService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/favorites",
    tags=["favorites"]
)


@router.get(
    "",
    response_model=FavoritesListResponse,
    status_code=200,
    summary="List favorite restaurants",
)
async def list_favorites_endpoint(
    favorites_service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesListResponse:
    logger.info("GET /favorites called")

    favorites = favorites_service.list_favorites()
    return FavoritesListResponse(favorites=favorites, count=len(favorites))


@router.post(
    "/toggle",
    response_model=FavoriteToggleResponse,
    status_code=200,
    summary="Toggle a restaurant in favorites",
    description="""
    Saves the posted restaurant snapshot if its id is not a favorite yet,
    otherwise removes it. Toggling twice restores the previous collection.
    """
)
async def toggle_favorite_endpoint(
    restaurant: Restaurant,
    favorites_service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteToggleResponse:
    logger.info(f"POST /favorites/toggle called for restaurant_id={restaurant.id}")

    is_favorite = favorites_service.toggle_favorite(restaurant)
    count = len(favorites_service.list_favorites())

    return FavoriteToggleResponse(
        restaurant_id=restaurant.id,
        is_favorite=is_favorite,
        count=count,
    )


@router.delete(
    "/{restaurant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a restaurant from favorites",
)
async def delete_favorite_endpoint(
    restaurant_id: str,
    favorites_service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    logger.info(f"DELETE /favorites/{restaurant_id} called")

    removed = favorites_service.remove_favorite(restaurant_id)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "details": f"Favorite {restaurant_id} not found"}
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
