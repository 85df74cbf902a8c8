"""Favorites domain: a persisted, id-keyed list of activities with toggle semantics."""
import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from tinysparks.domain.activity.models import Activity
from tinysparks.domain.common.errors import PersistenceError, PersistenceReadError
from tinysparks.domain.favorites.repositories import KeyValueStorage
from tinysparks.domain.favorites.schemas import StoredActivity

logger = logging.getLogger(__name__)

DEFAULT_FAVORITES_KEY = "tinySparksFavorites"


def is_favorite(activity_id: str, favorites: List[Activity]) -> bool:
    """True if an activity with this id is in favorites."""
    return any(f.id == activity_id for f in favorites)


def toggled(favorites: List[Activity], activity: Activity) -> List[Activity]:
    """Return a new list with activity removed (if its id is present) or appended (if not)."""
    if is_favorite(activity.id, favorites):
        return [f for f in favorites if f.id != activity.id]
    return [*favorites, activity]


def _decode(key: str, raw: str) -> List[Activity]:
    """Decode the stored JSON array. Raises PersistenceReadError if the value as a whole is unusable."""
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceReadError(key, f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise PersistenceReadError(key, f"expected a JSON array, got {type(data).__name__}")
    out: List[Activity] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        try:
            activity = StoredActivity.model_validate(entry).to_activity()
        except PydanticValidationError as e:
            logger.warning("Dropping malformed favorite #%s under %r: %s", index, key, e)
            continue
        if activity.id in seen:
            continue
        seen.add(activity.id)
        out.append(activity)
    return out


class FavoritesStore:
    """
    Owns the favorites list for the running process. Storage is read once by load();
    every toggle writes the whole list back before returning, so memory and storage never diverge.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_FAVORITES_KEY):
        self._storage = storage
        self._key = key
        self._favorites: List[Activity] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def favorites(self) -> List[Activity]:
        return list(self._favorites)

    def __len__(self) -> int:
        return len(self._favorites)

    def ids(self) -> set[str]:
        return {f.id for f in self._favorites}

    def load(self) -> List[Activity]:
        """Read favorites from storage. Missing or corrupt data yields an empty list and never raises."""
        try:
            raw = self._storage.get(self._key)
            self._favorites = _decode(self._key, raw) if raw is not None else []
        except PersistenceReadError as e:
            logger.warning("Failed to parse favorites; starting empty: %s", e)
            self._favorites = []
        except OSError as e:
            logger.warning("Failed to read favorites storage; starting empty: %s", e)
            self._favorites = []
        except ValueError as e:
            logger.warning("Favorites storage is not decodable; starting empty: %s", e)
            self._favorites = []
        logger.info("Loaded %s favorites from %r", len(self._favorites), self._key)
        return self.favorites

    def toggle(self, activity: Activity) -> List[Activity]:
        """Add or remove activity (by id) and persist. On a failed write the in-memory list is unchanged."""
        updated = toggled(self._favorites, activity)
        payload = json.dumps([f.to_dict() for f in updated], ensure_ascii=False)
        try:
            self._storage.set(self._key, payload)
        except (OSError, ValueError) as e:
            raise PersistenceError(self._key, str(e)) from e
        self._favorites = updated
        return self.favorites

    def is_favorite(self, activity_id: str) -> bool:
        return is_favorite(activity_id, self._favorites)

    def get(self, activity_id: str) -> Optional[Activity]:
        for f in self._favorites:
            if f.id == activity_id:
                return f
        return None
