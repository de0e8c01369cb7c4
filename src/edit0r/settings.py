"""Settings for edit0r. Stored at ~/.edit0r/settings.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "EDIT0R_CONFIG_DIR"


@dataclass
class Settings:
    theme: str = "dark"
    line_numbers: bool = True
    # Highlighters run in this order: "syntax", "markdown", "pattern"
    highlighters: list[str] = field(default_factory=lambda: ["syntax", "markdown", "pattern"])
    # Regex -> capture name rules for the pattern highlighter
    patterns: dict[str, str] = field(default_factory=dict)
    themes_dir: str | None = None
    tab_width: int = 4


def get_config_dir() -> Path:
    return Path(os.environ.get(CONFIG_DIR_ENV, Path.home() / ".edit0r"))


def get_settings_path() -> Path:
    return get_config_dir() / "settings.json"


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build settings from decoded JSON, ignoring unknown or mistyped keys."""
    settings = Settings()
    defaults = asdict(settings)
    for key, default in defaults.items():
        if key not in data:
            continue
        value = data[key]
        if key == "themes_dir":
            if value is None or isinstance(value, str):
                settings.themes_dir = value
            continue
        if isinstance(default, bool) != isinstance(value, bool) or not isinstance(value, type(default)):
            logger.warning("Ignoring setting %r: expected %s", key, type(default).__name__)
            continue
        setattr(settings, key, value)
    return settings


def load_settings(path: Path | None = None) -> Settings:
    settings_path = path or get_settings_path()
    if not settings_path.exists():
        return Settings()
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Error reading settings %s: %s", settings_path, e)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Error reading settings %s: not a JSON object", settings_path)
        return Settings()
    return settings_from_dict(data)


def save_settings(settings: Settings, path: Path | None = None) -> None:
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
