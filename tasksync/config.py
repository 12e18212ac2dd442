"""Configuration for tasksync.

Settings live in ``~/.tasksync/config.json`` (or ``$TASKSYNC_HOME``) and can
be overridden per process with environment variables:

    TASKSYNC_HOME       config directory
    TASKSYNC_API_URL    task service root URL
    TASKSYNC_TIMEOUT    request timeout in seconds
    TASKSYNC_LOG_LEVEL  logging level name
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"
ENV_PREFIX = "TASKSYNC"


class Settings(BaseModel):
    """Client settings."""

    api_url: str = DEFAULT_API_URL
    timeout: float = 10.0
    log_level: str = "WARNING"


def get_config_dir() -> Path:
    """Get the tasksync config directory, creating it if needed."""
    override = os.environ.get(f"{ENV_PREFIX}_HOME")
    config_dir = Path(override).expanduser() if override else Path.home() / ".tasksync"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for field in ("api_url", "timeout", "log_level"):
        value = os.environ.get(f"{ENV_PREFIX}_{field.upper()}")
        if value is not None and value.strip():
            overrides[field] = value.strip()
    return overrides


def get_settings() -> Settings:
    """Load settings from the config file, then apply environment overrides.

    An unreadable or invalid config file falls back to defaults.
    """
    data: dict = {}
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            loaded = json.loads(config_file.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable {config_file}: {e}")

    data.update(_env_overrides())
    try:
        return Settings(**data)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        return Settings()


def save_settings(settings: Settings) -> None:
    """Save settings to the config file."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )
