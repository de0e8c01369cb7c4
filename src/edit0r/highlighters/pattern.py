"""Regex highlighter -- per-line pattern rules for quick, grammar-free styling."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Sequence

from edit0r.highlighters.base import CaptureHighlighter, CaptureSpan, HighlighterConfigError


def rust_use_rules() -> list[tuple[str, str]]:
    """Style the ``use `` prefix, trailing space included, of Rust import lines."""
    return [(r"^use ", "keyword.import")]


class PatternHighlighter(CaptureHighlighter):
    """Applies ``(regex, capture)`` rules to each line in order.

    Group 1 is captured when the pattern has one, the whole match otherwise.
    Rules never span rows.
    """

    def __init__(self, rules: Iterable[tuple[str, str]], *, name: str = "pattern") -> None:
        self.name = name
        self._rules: list[tuple[re.Pattern[str], str]] = []
        for pattern, capture in rules:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise HighlighterConfigError(f"Invalid pattern {pattern!r}: {e}") from e
            self._rules.append((compiled, capture))

    def captures(self, lines: Sequence[str]) -> Iterator[CaptureSpan]:
        for row, line in enumerate(lines):
            for pattern, capture in self._rules:
                group = 1 if pattern.groups else 0
                for match in pattern.finditer(line):
                    start, end = match.span(group)
                    if start < end:
                        yield CaptureSpan(row, start, end, capture)
