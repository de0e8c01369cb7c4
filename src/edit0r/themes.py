"""Themes -- ordered lists of named faces, built in or loaded from JSON.

Theme file format::

    {
      "name": "my-theme",
      "faces": [
        {"name": "keyword", "fg": "#ff9696", "bg": "default"},
        {"name": "comment", "fg": [120, 120, 120]}
      ]
    }

Missing ``fg``/``bg`` mean the terminal default colour.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from edit0r.faces import DEFAULT, Color, Face, parse_color

logger = logging.getLogger(__name__)


class ThemeError(ValueError):
    """A theme file could not be read or is malformed."""


@dataclass(frozen=True)
class ThemeEntry:
    name: str
    fg: Color = DEFAULT
    bg: Color = DEFAULT

    @property
    def face(self) -> Face:
        return Face(fg=self.fg, bg=self.bg)


Theme = list[tuple[str, Face]]


def _theme(entries: list[ThemeEntry]) -> Theme:
    return [(entry.name, entry.face) for entry in entries]


DARK_THEME: Theme = _theme(
    [
        ThemeEntry("default", fg=(255, 255, 255), bg=(0, 0, 0)),
        ThemeEntry("keyword", fg=(255, 150, 150)),
        ThemeEntry("keyword.import", fg=(255, 150, 150), bg=(0, 100, 0)),
        ThemeEntry("type", fg=(130, 200, 255)),
        ThemeEntry("function", fg=(250, 220, 120)),
        ThemeEntry("constant", fg=(200, 160, 255)),
        ThemeEntry("string", fg=(160, 220, 130)),
        ThemeEntry("string.escape", fg=(255, 200, 100)),
        ThemeEntry("comment", fg=(120, 130, 140)),
        ThemeEntry("property", fg=(180, 210, 230)),
        ThemeEntry("operator", fg=(220, 220, 220)),
        ThemeEntry("punctuation", fg=(170, 170, 170)),
        ThemeEntry("variable.builtin", fg=(255, 170, 120)),
        ThemeEntry("markup.heading", fg=(255, 210, 90)),
        ThemeEntry("markup.raw", fg=(160, 220, 130), bg=(30, 30, 30)),
        ThemeEntry("markup.quote", fg=(150, 150, 150)),
        ThemeEntry("markup.list", fg=(130, 200, 255)),
        ThemeEntry("markup.link", fg=(110, 170, 255)),
        ThemeEntry("markup.emphasis", fg=(255, 255, 255), bg=(50, 50, 70)),
        ThemeEntry("diff.plus", fg=(120, 220, 120)),
        ThemeEntry("diff.minus", fg=(240, 110, 110)),
        ThemeEntry("line_number", fg=(150, 150, 150)),
    ]
)

LIGHT_THEME: Theme = _theme(
    [
        ThemeEntry("default", fg=(30, 30, 30), bg=(250, 250, 250)),
        ThemeEntry("keyword", fg=(170, 20, 90)),
        ThemeEntry("keyword.import", fg=(170, 20, 90)),
        ThemeEntry("type", fg=(0, 90, 160)),
        ThemeEntry("function", fg=(120, 80, 0)),
        ThemeEntry("constant", fg=(100, 40, 170)),
        ThemeEntry("string", fg=(30, 120, 30)),
        ThemeEntry("string.escape", fg=(180, 90, 0)),
        ThemeEntry("comment", fg=(130, 130, 130)),
        ThemeEntry("property", fg=(20, 80, 120)),
        ThemeEntry("operator", fg=(60, 60, 60)),
        ThemeEntry("punctuation", fg=(90, 90, 90)),
        ThemeEntry("variable.builtin", fg=(190, 70, 0)),
        ThemeEntry("markup.heading", fg=(0, 70, 160)),
        ThemeEntry("markup.raw", fg=(30, 120, 30), bg=(235, 235, 235)),
        ThemeEntry("markup.quote", fg=(110, 110, 110)),
        ThemeEntry("markup.list", fg=(0, 90, 160)),
        ThemeEntry("markup.link", fg=(0, 60, 200)),
        ThemeEntry("markup.emphasis", fg=(0, 0, 0), bg=(225, 225, 240)),
        ThemeEntry("diff.plus", fg=(0, 130, 0)),
        ThemeEntry("diff.minus", fg=(180, 0, 0)),
        ThemeEntry("line_number", fg=(160, 160, 160)),
    ]
)

BUILTIN_THEMES: dict[str, Theme] = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}


def theme_from_dict(data: object) -> Theme:
    """Build a theme from decoded JSON. Raises ``ThemeError`` when malformed."""
    if not isinstance(data, dict) or not isinstance(data.get("faces"), list):
        raise ThemeError("Theme must be an object with a 'faces' list")
    theme: Theme = []
    for index, item in enumerate(data["faces"]):
        if not isinstance(item, dict) or not isinstance(item.get("name"), str) or not item["name"]:
            raise ThemeError(f"Face #{index} needs a non-empty 'name'")
        try:
            entry = ThemeEntry(item["name"], parse_color(item.get("fg")), parse_color(item.get("bg")))
        except ValueError as e:
            raise ThemeError(f"Face {item['name']!r}: {e}") from e
        theme.append((entry.name, entry.face))
    return theme


def load_theme_file(path: str | Path) -> Theme:
    """Read a JSON theme file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ThemeError(f"Cannot read theme {path}: {e}") from e
    return theme_from_dict(data)


def resolve_theme(name: str, themes_dir: str | Path | None = None) -> Theme:
    """Find a theme by built-in name, ``<themes_dir>/<name>.json`` or file path."""
    if name in BUILTIN_THEMES:
        return list(BUILTIN_THEMES[name])
    candidates = []
    if themes_dir is not None:
        candidates.append(Path(themes_dir) / f"{name}.json")
    candidates.append(Path(name))
    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Loading theme from %s", candidate)
            return load_theme_file(candidate)
    raise ThemeError(f"Unknown theme: {name!r}")
