"""Tests for favorites: toggle semantics, membership, load tolerance, write failure handling."""
import json

import pytest

from conftest import make_activity
from tinysparks.domain.common.errors import PersistenceError
from tinysparks.domain.favorites.services import (
    DEFAULT_FAVORITES_KEY,
    FavoritesStore,
    is_favorite,
    toggled,
)
from tinysparks.infra.storage.kv_storage import InMemoryStorage, JsonFileStorage


class FailingStorage(InMemoryStorage):
    def set(self, key, value):
        raise OSError("disk full")


def test_toggled_adds_then_removes():
    activity = make_activity("x")
    added = toggled([], activity)
    assert added == [activity]
    assert toggled(added, activity) == []


def test_toggled_matches_by_id_only():
    stored = make_activity("x", title="Original")
    edited = make_activity("x", title="Edited")
    assert toggled([stored], edited) == []


def test_toggled_appends_at_end():
    a, b = make_activity("a"), make_activity("b")
    assert [f.id for f in toggled([a], b)] == ["a", "b"]


def test_is_favorite():
    favorites = [make_activity("a")]
    assert is_favorite("a", favorites)
    assert not is_favorite("b", favorites)
    assert not is_favorite("a", [])


def test_toggle_twice_is_identity(favorites_store):
    favorites_store.toggle(make_activity("keep"))
    before = favorites_store.favorites
    activity = make_activity("x")
    favorites_store.toggle(activity)
    favorites_store.toggle(activity)
    assert favorites_store.favorites == before


def test_toggle_persists_under_key(favorites_store, storage):
    activity = make_activity("x")
    favorites_store.toggle(activity)
    stored = json.loads(storage.get(DEFAULT_FAVORITES_KEY))
    assert stored == [activity.to_dict()]
    assert stored[0]["safetyTip"] == "Supervise closely."


def test_load_with_nothing_stored_is_empty(favorites_store):
    assert favorites_store.favorites == []
    assert len(favorites_store) == 0


@pytest.mark.parametrize("raw", ["{not json", '{"id": "x"}', '"just a string"', "42"])
def test_corrupt_value_loads_empty(raw):
    # Scenario: stored value is not a JSON array -> empty list, no error.
    store = FavoritesStore(InMemoryStorage({DEFAULT_FAVORITES_KEY: raw}))
    assert store.load() == []


def test_malformed_entries_are_dropped():
    good = make_activity("good").to_dict()
    raw = json.dumps([good, {"id": "missing-fields"}, "nope", None])
    store = FavoritesStore(InMemoryStorage({DEFAULT_FAVORITES_KEY: raw}))
    assert [f.id for f in store.load()] == ["good"]


def test_duplicate_ids_keep_first():
    first = make_activity("dup", title="First").to_dict()
    second = make_activity("dup", title="Second").to_dict()
    store = FavoritesStore(InMemoryStorage({DEFAULT_FAVORITES_KEY: json.dumps([first, second])}))
    favorites = store.load()
    assert len(favorites) == 1
    assert favorites[0].title == "First"


def test_failed_write_leaves_memory_unchanged():
    store = FavoritesStore(FailingStorage())
    store.load()
    with pytest.raises(PersistenceError) as excinfo:
        store.toggle(make_activity("x"))
    assert excinfo.value.message == "Could not save favorites. Please try again."
    assert store.favorites == []


def test_get_and_ids(favorites_store):
    a = make_activity("a")
    favorites_store.toggle(a)
    assert favorites_store.get("a") == a
    assert favorites_store.get("b") is None
    assert favorites_store.ids() == {"a"}
    assert favorites_store.is_favorite("a")


def test_favorites_property_is_a_copy(favorites_store):
    favorites_store.toggle(make_activity("a"))
    snapshot = favorites_store.favorites
    snapshot.clear()
    assert len(favorites_store) == 1


def test_favorites_survive_restart_with_file_storage(tmp_path):
    # Scenario: favorite saved, process restarts, favorites are loaded back.
    path = tmp_path / "storage.json"
    activity = make_activity("persist-me", tags=["Quiet", "Indoor"])
    FavoritesStore(JsonFileStorage(path)).toggle(activity)

    reloaded = FavoritesStore(JsonFileStorage(path))
    assert reloaded.load() == [activity]


def test_custom_key_is_used(storage):
    store = FavoritesStore(storage, key="otherKey")
    store.toggle(make_activity("a"))
    assert storage.get("otherKey") is not None
    assert storage.get(DEFAULT_FAVORITES_KEY) is None


@pytest.mark.parametrize(
    "entry",
    [
        {"id": "x", "title": None, "category": None},
        {"id": "x", "title": "Cup Stack", "category": 7},
        {"id": "", "title": "Cup Stack", "category": "Cognitive"},
        {"id": "x", "title": "Cup Stack", "category": "Cognitive", "materials": "cups"},
    ],
)
def test_entries_with_wrong_field_types_are_dropped(entry):
    good = make_activity("good").to_dict()
    raw = json.dumps([entry, good])
    store = FavoritesStore(InMemoryStorage({DEFAULT_FAVORITES_KEY: raw}))
    assert [f.id for f in store.load()] == ["good"]


def test_non_utf8_storage_file_loads_empty_and_toggle_still_saves(tmp_path):
    # Scenario: storage file holds bytes that are not UTF-8; startup continues with no favorites.
    path = tmp_path / "storage.json"
    path.write_bytes(b'{"tinySparksFavorites": "\xff\xfe bad"}')
    store = FavoritesStore(JsonFileStorage(path))
    assert store.load() == []

    activity = make_activity("after-repair")
    store.toggle(activity)
    assert FavoritesStore(JsonFileStorage(path)).load() == [activity]


def test_undecodable_storage_value_loads_empty():
    class UndecodableStorage(InMemoryStorage):
        def get(self, key):
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    store = FavoritesStore(UndecodableStorage())
    assert store.load() == []
