"""Config store: optional config file layered over env, plus in-process overrides."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON config file to a flat dict. Returns {} when missing or unreadable."""
    if not path.exists():
        logger.debug("Config file not found: %s (optional; using env/defaults)", path)
        return {}
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read config file %s: %s", path, e)
        return {}
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.warning("Invalid YAML in %s: %s", path, e)
            return {}
    elif suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON in %s: %s", path, e)
            return {}
    else:
        logger.warning("Config file must be .yaml, .yml, or .json: %s", path)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file must contain a mapping; got %s", type(data).__name__)
        return {}
    return data


class ConfigStore:
    """
    Builds the Settings snapshot.
    Precedence: overrides > config file > env/.env > field defaults.
    """

    def __init__(self, SettingsCls: type, config_file_path: Optional[str] = None):
        self._SettingsCls = SettingsCls
        self._file_path: Optional[Path] = None
        if config_file_path:
            self._file_path = Path(config_file_path).expanduser().resolve()
        self._overrides: dict[str, Any] = {}
        self._current: Optional[Any] = None
        self._lock = threading.RLock()

    def _build(self, overrides: dict[str, Any]) -> Any:
        env_dict = self._SettingsCls().model_dump()
        file_dict = read_config_file(self._file_path) if self._file_path else {}
        return self._SettingsCls(**{**env_dict, **file_dict, **overrides})

    def load_initial(self) -> None:
        """Build settings from env, then file, then overrides. Call once at startup."""
        with self._lock:
            self._current = self._build(self._overrides)
            if self._file_path and self._file_path.exists():
                logger.info("Loaded config file (master over env): %s", self._file_path)

    def get_settings(self) -> Any:
        """Return the current Settings instance, loading it on first use."""
        with self._lock:
            if self._current is None:
                self.load_initial()
            return self._current

    def update(self, overrides: dict[str, Any]) -> None:
        """Merge overrides and rebuild. On validation error the previous settings are kept."""
        with self._lock:
            if self._current is None:
                self.load_initial()
            try:
                merged = {**self._current.model_dump(), **self._overrides, **overrides}
                self._current = self._SettingsCls(**merged)
                self._overrides.update(overrides)
            except Exception as e:
                logger.warning("Config update validation failed; keeping previous config: %s", e)

    def clear_overrides(self) -> None:
        """Drop overrides and rebuild from file + env."""
        with self._lock:
            self._overrides.clear()
            self._current = self._build({})
