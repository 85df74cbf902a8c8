"""Application settings and configuration."""
import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tinysparks.config_store import ConfigStore


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "TinySparks API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_v1_prefix: str = "/v1"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["*"]

    # Gemini API (activity plan generation). API_KEY is accepted for compatibility with the web client's env.
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    llm_default_text_model: str = "gemini-2.5-flash"
    # Used once when the default model is rate limited; empty disables the fallback
    llm_backup_text_model: str = ""

    # Favorites storage
    favorites_storage_backend: str = "file"  # file | memory
    favorites_storage_path: str = ".tinysparks_storage.json"
    favorites_storage_key: str = "tinySparksFavorites"


# Config file path: CONFIG_FILE env or default config.yaml at the project root (config file is master over env)
_config_file = os.environ.get("CONFIG_FILE") or str(
    Path(__file__).resolve().parent.parent / "config.yaml"
)
_config_store = ConfigStore(Settings, _config_file)
_config_store.load_initial()


class _SettingsProxy:
    """Proxy so 'settings.attr' always returns current value from config store."""

    def __getattr__(self, name: str):
        return getattr(_config_store.get_settings(), name)


settings: Settings = _SettingsProxy()  # type: ignore[assignment]


def get_settings() -> Settings:
    """Return current Settings snapshot."""
    return _config_store.get_settings()


def get_config_store() -> ConfigStore:
    """Return the config store for update() and clear_overrides()."""
    return _config_store
