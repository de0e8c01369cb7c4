"""edit0r: per-character face attribution and run-based rendering for text buffers."""

from edit0r.coalesce import Run, coalesce, resolve_runs, styled_segments
from edit0r.document import Document, split_lines
from edit0r.faces import (
    DEFAULT_FACE,
    DEFAULT_FACE_ID,
    INVALID_FACE,
    Color,
    Face,
    FaceId,
    FaceRegistry,
    parse_color,
)
from edit0r.grid import Grid, GridInvariantError
from edit0r.highlighters import (
    CaptureSpan,
    Highlighter,
    HighlighterConfigError,
    MarkdownHighlighter,
    PatternHighlighter,
    SyntaxHighlighter,
    build_highlighters,
    run_highlighters,
)
from edit0r.render import AnsiRenderer, LineNumberGutter, RenderTarget, draw_document, render_ansi
from edit0r.themes import BUILTIN_THEMES, ThemeError, load_theme_file, resolve_theme

__all__ = [
    "AnsiRenderer",
    "BUILTIN_THEMES",
    "CaptureSpan",
    "Color",
    "DEFAULT_FACE",
    "DEFAULT_FACE_ID",
    "Document",
    "Face",
    "FaceId",
    "FaceRegistry",
    "Grid",
    "GridInvariantError",
    "Highlighter",
    "HighlighterConfigError",
    "INVALID_FACE",
    "LineNumberGutter",
    "MarkdownHighlighter",
    "PatternHighlighter",
    "RenderTarget",
    "Run",
    "SyntaxHighlighter",
    "ThemeError",
    "build_highlighters",
    "coalesce",
    "draw_document",
    "load_theme_file",
    "parse_color",
    "render_ansi",
    "resolve_runs",
    "resolve_theme",
    "run_highlighters",
    "split_lines",
    "styled_segments",
]
