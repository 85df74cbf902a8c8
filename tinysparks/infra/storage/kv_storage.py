"""Key-value storage backends for the favorites store."""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class InMemoryStorage:
    """Process-local storage. Nothing survives a restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    One JSON document on disk mapping keys to string values.
    Writes go to a temp file in the same directory and are renamed over the target,
    so the file is never left partially written.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser().resolve()
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Storage file %s is not valid UTF-8 (%s); treating as empty", self._path, e)
            return {}
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Storage file %s is not valid JSON (%s); treating as empty", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s must contain an object; got %s", self._path, type(data).__name__)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, ensure_ascii=False)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_path, self._path)
            except Exception:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise


def build_storage(backend: str, path: str | Path) -> InMemoryStorage | JsonFileStorage:
    """Storage from settings: "memory" or "file" (default)."""
    backend = (backend or "file").strip().lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend != "file":
        raise ValueError(f"Unknown favorites storage backend: {backend!r} (expected 'file' or 'memory')")
    return JsonFileStorage(path)
