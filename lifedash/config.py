"""Configuration storage for lifedash.

Settings live in ``~/.lifedash/config.json`` (directory overridable with
``LIFEDASH_HOME``). Environment variables prefixed with ``LIFEDASH_``
override individual values.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

ENV_PREFIX = "LIFEDASH_"


class Settings(BaseModel):
    """Application settings."""

    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy URL; defaults to a SQLite file in the config dir",
    )
    default_user_id: int = Field(default=1, description="User assumed when a request names none")
    priority_cap: int = Field(default=3, ge=1, description="Priority today tasks per day")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"]
    )
    log_level: str = "INFO"
    log_dir: str | None = None
    seed_defaults: bool = True
    host: str = "127.0.0.1"
    port: int = 8000

    def resolved_database_url(self) -> str:
        """Database URL, falling back to ``<config dir>/lifedash.db``."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{(get_config_dir() / 'lifedash.db').as_posix()}"

    def resolved_log_dir(self) -> Path:
        """Directory for the log file."""
        if self.log_dir:
            return Path(self.log_dir).expanduser()
        return get_config_dir() / "logs"


def get_config_dir() -> Path:
    """Get the lifedash config directory, creating it if needed."""
    override = os.environ.get(f"{ENV_PREFIX}HOME")
    config_dir = Path(override).expanduser() if override else Path.home() / ".lifedash"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _env_overrides() -> dict[str, str | list[str]]:
    """Collect ``LIFEDASH_<FIELD>`` environment variables for known fields."""
    overrides: dict[str, str | list[str]] = {}
    for name in Settings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is None or raw.strip() == "":
            continue
        if name == "cors_origins":
            overrides[name] = [part.strip() for part in raw.split(",") if part.strip()]
        else:
            overrides[name] = raw.strip()
    return overrides


def load_settings() -> Settings:
    """Load settings from config.json, then apply environment overrides.

    A missing or unreadable config file yields defaults.
    """
    data: dict = {}
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            loaded = json.loads(config_file.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
        except (json.JSONDecodeError, OSError):
            data = {}

    data.update(_env_overrides())
    try:
        return Settings(**data)
    except ValidationError:
        # Invalid config file: defaults plus environment.
        return Settings(**_env_overrides())


def save_settings(settings: Settings) -> Path:
    """Save settings to config.json and return its path."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )
    return config_file
