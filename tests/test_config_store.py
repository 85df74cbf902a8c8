"""Tests for config file loading and ConfigStore precedence."""
import json

from tinysparks.config_store import ConfigStore, read_config_file
from tinysparks.settings import Settings


def test_read_yaml_and_json(tmp_path):
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text("log_level: DEBUG\nfavorites_storage_backend: memory\n", encoding="utf-8")
    assert read_config_file(yaml_path) == {"log_level": "DEBUG", "favorites_storage_backend": "memory"}

    json_path = tmp_path / "config.json"
    json_path.write_text(json.dumps({"log_level": "WARNING"}), encoding="utf-8")
    assert read_config_file(json_path) == {"log_level": "WARNING"}


def test_read_unusable_files_returns_empty(tmp_path):
    assert read_config_file(tmp_path / "missing.yaml") == {}
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("a: [unclosed", encoding="utf-8")
    assert read_config_file(bad_yaml) == {}
    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n", encoding="utf-8")
    assert read_config_file(not_mapping) == {}
    wrong_suffix = tmp_path / "config.toml"
    wrong_suffix.write_text("a = 1", encoding="utf-8")
    assert read_config_file(wrong_suffix) == {}


def test_file_overrides_env(tmp_path, monkeypatch):
    monkeypatch.setenv("LLM_DEFAULT_TEXT_MODEL", "from-env")
    monkeypatch.setenv("FAVORITES_STORAGE_KEY", "envKey")
    path = tmp_path / "config.yaml"
    path.write_text("llm_default_text_model: from-file\n", encoding="utf-8")
    store = ConfigStore(Settings, str(path))
    store.load_initial()
    s = store.get_settings()
    assert s.llm_default_text_model == "from-file"
    assert s.favorites_storage_key == "envKey"


def test_api_key_alias(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "alias-key")
    store = ConfigStore(Settings, str(tmp_path / "missing.yaml"))
    assert store.get_settings().gemini_api_key == "alias-key"


def test_update_and_clear_overrides(tmp_path):
    store = ConfigStore(Settings, str(tmp_path / "missing.yaml"))
    store.update({"favorites_storage_backend": "memory"})
    assert store.get_settings().favorites_storage_backend == "memory"
    store.clear_overrides()
    assert store.get_settings().favorites_storage_backend == Settings().favorites_storage_backend


def test_invalid_update_keeps_previous(tmp_path):
    store = ConfigStore(Settings, str(tmp_path / "missing.yaml"))
    before = store.get_settings()
    store.update({"debug": "not-a-bool"})
    assert store.get_settings() is before
