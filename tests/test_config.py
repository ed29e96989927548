# tests/test_config.py

import json
from pathlib import Path

import pytest

from lifedash.config import Settings, get_config_dir, load_settings, save_settings


@pytest.fixture(autouse=True)
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("LIFEDASH_HOME", str(home))
    for name in Settings.model_fields:
        monkeypatch.delenv(f"LIFEDASH_{name.upper()}", raising=False)
    return home


def test_defaults_without_config_file(config_home: Path) -> None:
    settings = load_settings()
    assert settings == Settings()
    assert settings.priority_cap == 3
    assert settings.default_user_id == 1
    assert get_config_dir() == config_home
    assert config_home.is_dir()


def test_database_url_falls_back_to_config_dir(config_home: Path) -> None:
    assert Settings().resolved_database_url() == f"sqlite:///{(config_home / 'lifedash.db').as_posix()}"
    assert Settings(database_url="sqlite://").resolved_database_url() == "sqlite://"
    assert Settings().resolved_log_dir() == config_home / "logs"


def test_config_file_and_env_overrides(config_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_home.mkdir(parents=True)
    (config_home / "config.json").write_text(json.dumps({"priority_cap": 5, "port": 9000}))
    monkeypatch.setenv("LIFEDASH_PORT", "8100")
    monkeypatch.setenv("LIFEDASH_CORS_ORIGINS", "http://a.test, http://b.test,")

    settings = load_settings()
    assert settings.priority_cap == 5
    assert settings.port == 8100
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_broken_config_file_yields_defaults(config_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_home.mkdir(parents=True)
    (config_home / "config.json").write_text("{not json")
    assert load_settings() == Settings()

    (config_home / "config.json").write_text(json.dumps({"priority_cap": 0}))
    monkeypatch.setenv("LIFEDASH_DEFAULT_USER_ID", "4")
    settings = load_settings()
    assert settings.priority_cap == 3
    assert settings.default_user_id == 4


def test_save_and_reload(config_home: Path) -> None:
    path = save_settings(Settings(priority_cap=2, seed_defaults=False))
    assert path == config_home / "config.json"
    reloaded = load_settings()
    assert reloaded.priority_cap == 2
    assert reloaded.seed_defaults is False
