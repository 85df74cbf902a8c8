"""Favorites domain: persisted toggle list of activities."""
from tinysparks.domain.favorites.services import FavoritesStore, is_favorite, toggled

__all__ = ["FavoritesStore", "is_favorite", "toggled"]
