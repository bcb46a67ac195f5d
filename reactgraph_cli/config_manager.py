"""Configuration manager for ReactGraph CLI using TOML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from . import config

logger = logging.getLogger(__name__)

OUTPUT_SECTION = "output"


def _config_file(path: Optional[Path]) -> Path:
    return path if path is not None else config.CONFIG_FILE


def load_full_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    config_file = _config_file(path)
    if not config_file.exists():
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Could not read config %s: %s", config_file, exc)
        return {}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Output settings: defaults overlaid with the ``[output]`` section.

    Unknown keys in the file are ignored.
    """
    settings = dict(config.DEFAULT_OUTPUT_CONFIG)
    section = load_full_config(path).get(OUTPUT_SECTION, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring malformed [%s] section", OUTPUT_SECTION)
        return settings
    for key, value in section.items():
        if key in settings:
            settings[key] = value
    return settings


def save_config(path: Optional[Path] = None, **values: Any) -> Dict[str, Any]:
    """Update the ``[output]`` section, preserving every other section.

    Returns the resulting output settings.
    """
    for key in values:
        if key not in config.DEFAULT_OUTPUT_CONFIG:
            raise KeyError(key)

    config_file = _config_file(path)
    full = load_full_config(config_file)
    section = full.get(OUTPUT_SECTION)
    if not isinstance(section, dict):
        section = {}
    section.update(values)
    full[OUTPUT_SECTION] = section

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        toml.dump(full, f)
    logger.debug("Saved config to %s", config_file)
    return load_config(config_file)


def coerce_value(key: str, raw: str) -> Any:
    """Convert a command-line string to the type of *key*'s default.

    Raises ``KeyError`` for unknown keys and ``ValueError`` for bad values.
    """
    if key not in config.DEFAULT_OUTPUT_CONFIG:
        raise KeyError(key)
    default = config.DEFAULT_OUTPUT_CONFIG[key]

    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
        raise ValueError(f"expected a boolean for '{key}', got '{raw}'")
    if isinstance(default, int):
        value = int(raw)
        if value < 0:
            raise ValueError(f"'{key}' must not be negative")
        return value
    if key == "format" and raw not in config.OUTPUT_FORMATS:
        raise ValueError(f"format must be one of: {', '.join(config.OUTPUT_FORMATS)}")
    return raw
