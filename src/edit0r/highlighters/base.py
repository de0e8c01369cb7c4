"""Highlighter base types -- capture spans, resolution and sequencing.

A highlighter turns buffer lines into ``CaptureSpan`` values (row, column
range, capture name) and writes the matching face ids into the grid. Spans
are applied in the order they are produced, so where two spans share a
cell the later one wins. There is no priority scheme on top of that.

Highlighters run in an explicit, fixed sequence. Each one sees the grid as
left by the previous one. A highlighter that fails to construct is left
out of the sequence; one that fails during a pass leaves the grid as it
found it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, NamedTuple, Protocol, Sequence

from edit0r.faces import DEFAULT_FACE_ID, FaceId, FaceRegistry
from edit0r.grid import Grid, GridInvariantError

logger = logging.getLogger(__name__)


class HighlighterConfigError(Exception):
    """A highlighter could not be built (unknown grammar, bad query, ...)."""


class CaptureSpan(NamedTuple):
    row: int
    col_start: int
    col_end: int
    name: str


class Highlighter(Protocol):
    name: str

    def apply(self, lines: Sequence[str], grid: Grid, registry: FaceRegistry) -> None: ...


# ---------------------------------------------------------------------------
# Capture name -> face resolution
# ---------------------------------------------------------------------------

# Capture names that should share another capture's face. Anything not
# listed here still falls back along its dotted prefix.
CAPTURE_ALIASES: dict[str, str] = {
    "function.method": "function",
    "function.macro": "function",
    "function.builtin": "function",
    "function.call": "function",
    "method": "function",
    "constructor": "type",
    "type.builtin": "type",
    "constant.builtin": "constant",
    "boolean": "constant",
    "number": "constant",
    "string.doc": "comment",
    "comment.doc": "comment",
    "keyword.directive": "keyword",
    "keyword.operator": "keyword",
    "namespace": "type",
    "attribute": "function",
    "label": "keyword",
    "tag": "keyword",
    "markup.strong": "markup.emphasis",
    "markup.italic": "markup.emphasis",
    "markup.strikethrough": "markup.emphasis",
    "markup.raw.block": "markup.raw",
}


def resolve_capture(name: str, registry: FaceRegistry) -> FaceId:
    """Map a capture name to a face id.

    Tries the name itself, then its alias, then the same with the last
    dotted component dropped. Unresolvable names map to the default face.
    """
    candidate: str | None = name
    seen: set[str] = set()
    while candidate and candidate not in seen:
        seen.add(candidate)
        face_id = registry.lookup_by_name(candidate)
        if face_id is not None:
            return face_id
        alias = CAPTURE_ALIASES.get(candidate)
        if alias is not None:
            face_id = registry.lookup_by_name(alias)
            if face_id is not None:
                return face_id
        candidate = candidate.rpartition(".")[0]
    return DEFAULT_FACE_ID


def apply_captures(spans: Iterable[CaptureSpan], grid: Grid, registry: FaceRegistry) -> int:
    """Write *spans* into *grid* in order. Returns the number applied."""
    resolved: dict[str, FaceId] = {}
    count = 0
    for span in spans:
        face_id = resolved.get(span.name)
        if face_id is None:
            face_id = resolved[span.name] = resolve_capture(span.name, registry)
        grid.set_range(span.row, span.col_start, span.col_end, face_id)
        count += 1
    return count


def split_span(
    lines: Sequence[str],
    start: tuple[int, int],
    end: tuple[int, int],
    name: str,
) -> list[CaptureSpan]:
    """Break a ``(row, col)`` -> ``(row, col)`` range into one span per row.

    Inner rows are covered to their end. Rows that end up empty are dropped.
    """
    start_row, start_col = start
    end_row, end_col = end
    if start_row == end_row:
        if end_col <= start_col:
            return []
        return [CaptureSpan(start_row, start_col, end_col, name)]

    spans: list[CaptureSpan] = []
    for row in range(max(start_row, 0), min(end_row, len(lines) - 1) + 1):
        col_start = start_col if row == start_row else 0
        col_end = end_col if row == end_row else len(lines[row])
        if col_end > col_start:
            spans.append(CaptureSpan(row, col_start, col_end, name))
    return spans


# ---------------------------------------------------------------------------
# Capture-based highlighter base
# ---------------------------------------------------------------------------


class CaptureHighlighter(ABC):
    """Base for highlighters that produce a flat list of capture spans.

    All spans are collected before any is applied, so a parse that raises
    midway leaves the grid untouched.
    """

    name = "capture"

    @abstractmethod
    def captures(self, lines: Sequence[str]) -> Iterable[CaptureSpan]:
        """Yield spans in the order they should be applied."""

    def apply(self, lines: Sequence[str], grid: Grid, registry: FaceRegistry) -> None:
        spans = list(self.captures(lines))
        applied = apply_captures(spans, grid, registry)
        logger.debug("%s: applied %d spans", self.name, applied)


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


def build_highlighters(factories: Iterable[Callable[[], Highlighter]]) -> list[Highlighter]:
    """Construct highlighters, leaving out any that fail to configure."""
    highlighters: list[Highlighter] = []
    for factory in factories:
        try:
            highlighters.append(factory())
        except HighlighterConfigError as e:
            logger.warning("Highlighter disabled: %s", e)
    return highlighters


def run_highlighters(
    highlighters: Sequence[Highlighter], grid: Grid, registry: FaceRegistry
) -> None:
    """Run *highlighters* in order over *grid*.

    A pass that raises is logged and skipped. The grid invariant is checked
    after every pass; a violation propagates.
    """
    lines = grid.lines
    for highlighter in highlighters:
        try:
            highlighter.apply(lines, grid, registry)
        except GridInvariantError:
            raise
        except Exception:
            logger.exception("Highlighter %s failed; keeping existing faces", highlighter.name)
        grid.assert_invariant()
