"""Highlighters that overlay faces on the grid."""

from edit0r.highlighters.base import (
    CAPTURE_ALIASES,
    CaptureHighlighter,
    CaptureSpan,
    Highlighter,
    HighlighterConfigError,
    apply_captures,
    build_highlighters,
    resolve_capture,
    run_highlighters,
    split_span,
)
from edit0r.highlighters.markdown import MarkdownHighlighter
from edit0r.highlighters.pattern import PatternHighlighter, rust_use_rules
from edit0r.highlighters.syntax import DEFAULT_QUERY, CaptureQuery, QueryError, SyntaxHighlighter

__all__ = [
    "CAPTURE_ALIASES",
    "CaptureHighlighter",
    "CaptureQuery",
    "CaptureSpan",
    "DEFAULT_QUERY",
    "Highlighter",
    "HighlighterConfigError",
    "MarkdownHighlighter",
    "PatternHighlighter",
    "QueryError",
    "SyntaxHighlighter",
    "apply_captures",
    "build_highlighters",
    "resolve_capture",
    "run_highlighters",
    "rust_use_rules",
    "split_span",
]
