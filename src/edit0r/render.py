"""Render adapters -- turn coalesced runs into draw calls.

``draw_document`` walks a document row by row and calls a ``RenderTarget``
once per run. The line-number gutter is drawn here as a decoration in
front of each row; the buffer text itself is never touched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from edit0r.document import Document
from edit0r.faces import DEFAULT, DEFAULT_FACE_ID, Color, Face
from edit0r.width import visible_width

RESET = "\x1b[0m"


class RenderTarget(Protocol):
    def draw_segment(self, row: int, col: int, face: Face, text: str) -> None: ...

    def end_line(self, row: int) -> None: ...


@dataclass
class LineNumberGutter:
    """Right-aligned line numbers followed by one space."""

    line_count: int
    face_name: str = "line_number"

    @property
    def width(self) -> int:
        if self.line_count <= 0:
            return 0
        return math.ceil(math.log10(self.line_count + 1))

    def label(self, row: int) -> str:
        return f"{row + 1:>{self.width}} "


def draw_document(
    document: Document,
    target: RenderTarget,
    *,
    line_numbers: bool = False,
    first_row: int = 0,
    max_rows: int | None = None,
) -> int:
    """Draw the visible rows of *document*. Returns the number of draw calls."""
    registry = document.registry
    last_row = len(document) if max_rows is None else min(len(document), first_row + max_rows)
    gutter = LineNumberGutter(len(document)) if line_numbers else None
    gutter_face = registry.face_for_name(gutter.face_name) if gutter else None

    calls = 0
    for row in range(max(first_row, 0), last_row):
        col = 0
        if gutter is not None and gutter_face is not None:
            label = gutter.label(row)
            target.draw_segment(row, col, gutter_face, label)
            col += len(label)
            calls += 1
        for face, text in document.segments(row):
            target.draw_segment(row, col, face, text)
            col += len(text)
            calls += 1
        target.end_line(row)
    return calls


def _sgr_color(color: Color, *, background: bool) -> str:
    if color == DEFAULT:
        return "49" if background else "39"
    r, g, b = color
    return f"{48 if background else 38};2;{r};{g};{b}"


def sgr(face: Face) -> str:
    """24-bit SGR sequence selecting *face*."""
    return f"\x1b[{_sgr_color(face.fg, background=False)};{_sgr_color(face.bg, background=True)}m"


class AnsiRenderer:
    """Builds terminal lines with truecolor escape sequences.

    With ``width`` set, each line is padded to that many columns using
    ``pad_face`` so the theme background fills the row.
    """

    def __init__(
        self,
        *,
        width: int | None = None,
        pad_face: Face | None = None,
        tab_width: int = 4,
    ) -> None:
        self._width = width
        self._pad_face = pad_face
        self._tab = " " * tab_width
        self._lines: list[str] = []
        self._parts: list[str] = []
        self._columns = 0

    def draw_segment(self, row: int, col: int, face: Face, text: str) -> None:
        text = text.replace("\t", self._tab)
        self._parts.append(sgr(face) + text)
        self._columns += visible_width(text)

    def end_line(self, row: int) -> None:
        if self._width is not None and self._columns < self._width:
            face = self._pad_face or Face()
            self._parts.append(sgr(face) + " " * (self._width - self._columns))
        self._lines.append("".join(self._parts) + RESET)
        self._parts = []
        self._columns = 0

    @property
    def lines(self) -> list[str]:
        return self._lines


def render_ansi(
    document: Document,
    *,
    line_numbers: bool = False,
    width: int | None = None,
    tab_width: int = 4,
) -> list[str]:
    """Render the whole document to ANSI-coloured lines."""
    renderer = AnsiRenderer(
        width=width,
        pad_face=document.registry.face_for_id(DEFAULT_FACE_ID),
        tab_width=tab_width,
    )
    draw_document(document, renderer, line_numbers=line_numbers)
    return renderer.lines
