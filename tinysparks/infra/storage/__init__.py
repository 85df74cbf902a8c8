"""Key-value storage backends."""
from tinysparks.infra.storage.kv_storage import InMemoryStorage, JsonFileStorage, build_storage

__all__ = ["InMemoryStorage", "JsonFileStorage", "build_storage"]
