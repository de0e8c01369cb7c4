"""Markdown highlighter built on ``markdown-it-py``.

Block constructs come straight from the token source maps (``token.map``
is a half-open row range). Inline tokens carry no positions, so their
delimiters are located by scanning the row left to right, in step with
the children of each ``inline`` token. When a delimiter cannot be found
the construct is simply left unstyled.

Fenced code blocks tagged with a language are handed to a
``SyntaxHighlighter`` for that language when one is available.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from edit0r.highlighters.base import (
    CaptureHighlighter,
    CaptureSpan,
    HighlighterConfigError,
    split_span,
)
from edit0r.highlighters.syntax import SyntaxHighlighter

logger = logging.getLogger(__name__)

_BLOCK_CAPTURES = {
    "heading_open": "markup.heading",
    "code_block": "markup.raw.block",
    "fence": "markup.raw.block",
    "blockquote_open": "markup.quote",
    "hr": "punctuation.special",
}

_INLINE_CAPTURES = {
    "strong": "markup.strong",
    "em": "markup.italic",
    "s": "markup.strikethrough",
}


def _full_rows(lines: Sequence[str], row_map: list[int], name: str) -> Iterator[CaptureSpan]:
    for row in range(row_map[0], min(row_map[1], len(lines))):
        if lines[row]:
            yield CaptureSpan(row, 0, len(lines[row]), name)


class MarkdownHighlighter(CaptureHighlighter):
    """Highlights Markdown structure: headings, code, quotes, lists, inline markup."""

    name = "markdown"

    def __init__(self, *, highlight_code: bool = True) -> None:
        # Escapes and entities stay separate ``text_special`` tokens so their
        # source form can be matched.
        self._md = MarkdownIt("gfm-like").disable("text_join")
        self._highlight_code = highlight_code
        self._code_highlighters: dict[str, SyntaxHighlighter | None] = {}

    def captures(self, lines: Sequence[str]) -> Iterator[CaptureSpan]:
        if not lines:
            return
        for token in self._md.parse("\n".join(lines)):
            if token.map is None:
                continue
            name = _BLOCK_CAPTURES.get(token.type)
            if name is not None:
                yield from _full_rows(lines, token.map, name)
            if token.type == "fence":
                yield from self._fence_code(lines, token)
            elif token.type == "list_item_open":
                yield from self._list_marker(lines, token)
            elif token.type == "inline" and token.children:
                yield from _InlineScanner(lines, token.map[0]).scan(token.children)

    # -- blocks -------------------------------------------------------------

    def _list_marker(self, lines: Sequence[str], token: Token) -> Iterator[CaptureSpan]:
        row = token.map[0] if token.map else -1
        if not 0 <= row < len(lines):
            return
        marker = f"{token.info}{token.markup}"
        col = lines[row].find(marker)
        if col >= 0:
            yield CaptureSpan(row, col, col + len(marker), "markup.list")

    def _fence_code(self, lines: Sequence[str], token: Token) -> Iterator[CaptureSpan]:
        language = token.info.strip().split(" ", 1)[0] if token.info else ""
        if not self._highlight_code or not language or token.level != 0 or token.map is None:
            return
        start, end = token.map[0] + 1, min(token.map[1], len(lines))
        if not lines[token.map[0]].startswith(token.markup):
            # Indented fences have their content re-indented by the parser.
            return
        if end - 1 > token.map[0] and lines[end - 1].strip().startswith(token.markup):
            end -= 1
        highlighter = self._code_highlighter(language)
        if highlighter is None or start >= end:
            return
        for span in highlighter.captures(lines[start:end]):
            yield span._replace(row=span.row + start)

    def _code_highlighter(self, language: str) -> SyntaxHighlighter | None:
        if language not in self._code_highlighters:
            try:
                self._code_highlighters[language] = SyntaxHighlighter(language)
            except HighlighterConfigError as e:
                logger.debug("No code highlighting for %r: %s", language, e)
                self._code_highlighters[language] = None
        return self._code_highlighters[language]


class _InlineScanner:
    """Finds the source columns of inline markup for one ``inline`` token."""

    def __init__(self, lines: Sequence[str], row: int) -> None:
        self._lines = lines
        self._row = row
        self._col = 0
        self._spans: list[CaptureSpan] = []
        # (kind, row, col, insertion index into _spans)
        self._open: list[tuple[str, int, int, int]] = []
        self._in_linkify = False

    def _line(self) -> str:
        return self._lines[self._row] if 0 <= self._row < len(self._lines) else ""

    def _find(self, needle: str) -> int:
        if not needle:
            return -1
        return self._line().find(needle, self._col)

    def scan(self, children: list[Token]) -> list[CaptureSpan]:
        for child in children:
            kind = child.type
            if kind in ("softbreak", "hardbreak"):
                self._row += 1
                self._col = 0
            elif kind == "text":
                self._text(child.content)
            elif kind == "text_special":
                self._skip(child.markup)
            elif kind == "html_inline":
                self._skip(child.content)
            elif kind == "code_inline":
                self._code_span(child.markup)
            elif kind == "image":
                self._image()
            elif kind in ("link_open", "link_close") and child.markup == "linkify":
                self._in_linkify = kind == "link_open"
            elif kind == "link_open":
                self._open_delimiter("link", "<" if child.markup == "autolink" else "[")
            elif kind == "link_close":
                self._close_link(child.markup == "autolink")
            elif kind.endswith("_open") and kind[:-5] in _INLINE_CAPTURES:
                self._open_delimiter(kind[:-5], child.markup)
            elif kind.endswith("_close") and kind[:-6] in _INLINE_CAPTURES:
                self._close_delimiter(kind[:-6], child.markup)
        return self._spans

    def _skip(self, source: str) -> None:
        index = self._find(source)
        if index >= 0:
            self._col = index + len(source)

    def _text(self, content: str) -> None:
        index = self._find(content)
        if index < 0:
            return
        self._col = index + len(content)
        if self._in_linkify:
            self._spans.append(CaptureSpan(self._row, index, self._col, "markup.link"))

    def _open_delimiter(self, kind: str, markup: str) -> None:
        index = self._find(markup)
        if index < 0:
            self._open.append((kind, -1, -1, len(self._spans)))
            return
        self._open.append((kind, self._row, index, len(self._spans)))
        self._col = index + len(markup)

    def _close(self, kind: str, end_col: int) -> None:
        while self._open:
            open_kind, row, col, insert_at = self._open.pop()
            if open_kind != kind:
                continue
            if row < 0:
                return
            name = "markup.link" if kind == "link" else _INLINE_CAPTURES[kind]
            # Enclosing markup goes before anything nested inside it.
            outer = split_span(self._lines, (row, col), (self._row, end_col), name)
            self._spans[insert_at:insert_at] = outer
            return

    def _close_delimiter(self, kind: str, markup: str) -> None:
        index = self._find(markup)
        if index < 0:
            self._discard(kind)
            return
        self._col = index + len(markup)
        self._close(kind, self._col)

    def _discard(self, kind: str) -> None:
        while self._open:
            if self._open.pop()[0] == kind:
                return

    def _close_link(self, autolink: bool) -> None:
        line = self._line()
        if autolink:
            index = self._find(">")
            if index < 0:
                self._discard("link")
                return
            self._col = index + 1
            self._close("link", self._col)
            return
        index = self._find("]")
        if index < 0:
            self._discard("link")
            return
        end = index + 1
        if line[end : end + 1] == "(":
            paren = line.find(")", end)
            end = paren + 1 if paren >= 0 else end
        elif line[end : end + 1] == "[":
            bracket = line.find("]", end)
            end = bracket + 1 if bracket >= 0 else end
        self._col = end
        self._close("link", end)

    def _code_span(self, markup: str) -> None:
        start = self._find(markup)
        if start < 0:
            return
        start_row = self._row
        self._col = start + len(markup)
        # Code spans may wrap; the parser emits no line breaks inside them.
        while 0 <= self._row < len(self._lines):
            end = self._find(markup)
            if end >= 0:
                self._col = end + len(markup)
                self._spans.extend(
                    split_span(self._lines, (start_row, start), (self._row, self._col), "markup.raw")
                )
                return
            self._row += 1
            self._col = 0
        self._row = start_row
        self._col = start + len(markup)

    def _image(self) -> None:
        start = self._find("![")
        if start < 0:
            return
        line = self._line()
        middle = line.find("](", start)
        end = line.find(")", middle) if middle >= 0 else -1
        if end < 0:
            return
        self._col = end + 1
        self._spans.append(CaptureSpan(self._row, start, end + 1, "markup.link"))
