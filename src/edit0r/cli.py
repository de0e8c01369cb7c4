"""Entry point for the edit0r CLI -- print a highlighted file to the terminal."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from functools import partial
from pathlib import Path
from typing import Callable

from edit0r.document import Document
from edit0r.faces import FaceRegistry
from edit0r.highlighters import (
    Highlighter,
    MarkdownHighlighter,
    PatternHighlighter,
    SyntaxHighlighter,
    build_highlighters,
    rust_use_rules,
)
from edit0r.render import render_ansi
from edit0r.settings import Settings, load_settings
from edit0r.themes import DARK_THEME, ThemeError, resolve_theme

logger = logging.getLogger(__name__)

_MARKDOWN_SUFFIXES = {".md", ".markdown"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="edit0r", description="Print a file with syntax highlighting")
    parser.add_argument("file", help="File to display")
    parser.add_argument("--theme", help="Built-in theme name or path to a JSON theme")
    parser.add_argument("--language", help="Grammar to use instead of guessing from the file name")
    parser.add_argument("--no-line-numbers", action="store_true", help="Hide the line number gutter")
    parser.add_argument("--width", type=int, default=None, help="Pad lines to this width (default: terminal width)")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def highlighter_factories(
    path: Path, settings: Settings, language: str | None = None
) -> list[Callable[[], Highlighter]]:
    """Factories for the highlighters enabled in *settings*, in order."""
    factories: list[Callable[[], Highlighter]] = []
    is_markdown = path.suffix.lower() in _MARKDOWN_SUFFIXES and not language
    for kind in settings.highlighters:
        if kind == "syntax" and not is_markdown:
            if language:
                factories.append(partial(SyntaxHighlighter, language))
            else:
                factories.append(partial(SyntaxHighlighter, filename=path.name))
        elif kind == "markdown" and is_markdown:
            factories.append(MarkdownHighlighter)
        elif kind == "pattern":
            rules = list(settings.patterns.items())
            if path.suffix == ".rs":
                rules = rust_use_rules() + rules
            if rules:
                factories.append(partial(PatternHighlighter, rules))
        elif kind not in ("syntax", "markdown", "pattern"):
            logger.warning("Unknown highlighter %r in settings", kind)
    return factories


def load_registry(settings: Settings, theme: str | None = None) -> FaceRegistry:
    registry = FaceRegistry()
    name = theme or settings.theme
    try:
        registry.load_theme(resolve_theme(name, settings.themes_dir))
    except ThemeError as e:
        logger.warning("%s; using the dark theme", e)
        registry.load_theme(DARK_THEME)
    return registry


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        return 1

    settings = load_settings()
    registry = load_registry(settings, args.theme)
    highlighters = build_highlighters(highlighter_factories(path, settings, args.language))

    document = Document.from_text(text, registry)
    document.highlight(highlighters)

    width = args.width if args.width is not None else shutil.get_terminal_size().columns
    for line in render_ansi(
        document,
        line_numbers=settings.line_numbers and not args.no_line_numbers,
        width=width,
        tab_width=settings.tab_width,
    ):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
