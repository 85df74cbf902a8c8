"""Favorites API: list, toggle, membership."""
import logging

from fastapi import APIRouter, Depends

from tinysparks.api.activity.schemas import (
    ActivityOut,
    FavoriteStatusResponse,
    FavoritesResponse,
    SectionsOut,
    ToggleFavoriteResponse,
)
from tinysparks.api.deps import get_favorites_store
from tinysparks.domain.favorites.services import FavoritesStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=FavoritesResponse)
async def list_favorites(store: FavoritesStore = Depends(get_favorites_store)):
    """Saved favorites, in the order they were added, plus the same list grouped into sections."""
    favorites = store.favorites
    return FavoritesResponse(
        count=len(favorites),
        activities=[ActivityOut.from_domain(a) for a in favorites],
        sections=SectionsOut.from_activities(favorites),
    )


@router.post("/toggle", response_model=ToggleFavoriteResponse)
async def toggle_favorite(
    activity: ActivityOut,
    store: FavoritesStore = Depends(get_favorites_store),
):
    """Save the activity, or remove it if an activity with the same id is already saved."""
    favorites = store.toggle(activity.to_domain())
    now_favorite = store.is_favorite(activity.id)
    logger.info("Favorite %s %s (count=%s)", activity.id, "added" if now_favorite else "removed", len(favorites))
    return ToggleFavoriteResponse(
        is_favorite=now_favorite,
        count=len(favorites),
        activities=[ActivityOut.from_domain(a) for a in favorites],
    )


@router.get("/{activity_id}", response_model=FavoriteStatusResponse)
async def favorite_status(
    activity_id: str,
    store: FavoritesStore = Depends(get_favorites_store),
):
    """Whether activity_id is saved."""
    saved = store.get(activity_id)
    return FavoriteStatusResponse(
        activity_id=activity_id,
        is_favorite=saved is not None,
        activity=ActivityOut.from_domain(saved) if saved else None,
    )
