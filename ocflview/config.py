"""Persistent JSON config helpers.

Stores defaults for the storage root, sort field, color mode, and log level.
Loading is forgiving: a missing or malformed config file reads as empty.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .display import COLOR_MODES
from .errors import ConfigurationError
from .listing.types import SortField

APP_NAME = "ocflview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_ROOT = "."
DEFAULT_COLOR = "auto"
DEFAULT_LOG_LEVEL = "WARNING"


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class Settings:
    """Effective defaults after merging the config file over built-ins."""

    root: str = DEFAULT_ROOT
    sort: SortField = SortField.NAME
    color: str = DEFAULT_COLOR
    log_level: str = DEFAULT_LOG_LEVEL


def _string_value(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Config key {key!r} must be a non-empty string")
    return value.strip()


def settings_from_config(data: dict[str, object]) -> Settings:
    """Validate config values; unknown keys are ignored.

    Raises ``ConfigurationError`` for a bad ``sort``, ``color``, or ``log_level``.
    """
    color = _string_value(data, "color", DEFAULT_COLOR).lower()
    if color not in COLOR_MODES:
        raise ConfigurationError(f"Config key 'color' must be one of: {', '.join(COLOR_MODES)}")

    log_level = _string_value(data, "log_level", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Config key 'log_level' has unknown level {log_level!r}")

    return Settings(
        root=_string_value(data, "root", DEFAULT_ROOT),
        sort=SortField.parse(_string_value(data, "sort", SortField.NAME.value)),
        color=color,
        log_level=log_level,
    )


def load_settings(path: Path | None = None) -> Settings:
    return settings_from_config(load_config(path))


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "load_settings",
    "settings_from_config",
]
