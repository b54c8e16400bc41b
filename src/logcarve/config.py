"""XDG directory management and configuration for logcarve."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from platformdirs import user_config_dir
from pydantic import ValidationError

from logcarve.models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.toml"


def get_config_dir() -> Path:
    """Get the logcarve config directory.

    Respects LOGCARVE_CONFIG_DIR environment variable if set.
    """
    if override := os.environ.get("LOGCARVE_CONFIG_DIR"):
        return Path(override)
    return Path(user_config_dir("logcarve"))


def get_profiles_dir() -> Path:
    """Get the profiles directory, creating it if needed."""
    d = get_config_dir() / "profiles"
    d.mkdir(parents=True, exist_ok=True)
    return d


def load_config() -> AppConfig:
    """Load application config from disk, returning defaults if not found or invalid."""
    path = get_config_dir() / CONFIG_FILE
    if not path.exists():
        return AppConfig()
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text())
        return AppConfig(**data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("ignoring invalid config %s: %s", path, e)
        return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Save application config to disk. Returns the file path."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / CONFIG_FILE
    path.write_bytes(tomli_w.dumps(config.model_dump(mode="json")).encode())
    return path
