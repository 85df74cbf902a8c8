"""Favorites storage protocol."""
from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """Persistent string key-value surface (the role browser localStorage plays in a web client)."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, durably, before returning."""
        ...
