"""Document -- buffer lines with their face grid and cached runs."""

from __future__ import annotations

import logging
from typing import Sequence

from edit0r.coalesce import Run, coalesce, resolve_runs
from edit0r.faces import DEFAULT_FACE_ID, Face, FaceRegistry
from edit0r.grid import Grid
from edit0r.highlighters import Highlighter, run_highlighters

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split loaded text into buffer lines.

    Line endings are normalised to ``\\n``; a trailing newline does not add
    an empty last line, and empty text has no lines at all.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class Document:
    """Read-only text plus the face data derived from it.

    ``highlight`` recomputes every face from scratch. Runs are cached per
    row and dropped whenever the grid changes.
    """

    def __init__(self, lines: Sequence[str], registry: FaceRegistry) -> None:
        self._registry = registry
        self._grid = Grid.initialize(lines)

        # Run cache
        self._cached_version: int | None = None
        self._cached_runs: dict[int, list[Run]] = {}

    @classmethod
    def from_text(cls, text: str, registry: FaceRegistry) -> Document:
        return cls(split_lines(text), registry)

    @property
    def lines(self) -> tuple[str, ...]:
        return self._grid.lines

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def registry(self) -> FaceRegistry:
        return self._registry

    def __len__(self) -> int:
        return len(self._grid)

    def highlight(self, highlighters: Sequence[Highlighter]) -> None:
        """Reset all faces and run *highlighters* in order."""
        self._grid.fill(DEFAULT_FACE_ID)
        run_highlighters(highlighters, self._grid, self._registry)
        logger.debug(
            "Highlighted %d lines with %s",
            len(self._grid),
            ", ".join(h.name for h in highlighters) or "nothing",
        )

    def runs(self, row: int) -> list[Run]:
        if self._cached_version != self._grid.version:
            self._cached_runs.clear()
            self._cached_version = self._grid.version
        runs = self._cached_runs.get(row)
        if runs is None:
            runs = coalesce(self._grid.lines[row], self._grid.row(row))
            self._cached_runs[row] = runs
        return runs

    def segments(self, row: int) -> list[tuple[Face, str]]:
        """``(Face, text)`` pairs covering *row*, resolved against the registry."""
        return resolve_runs(self._grid.lines[row], self.runs(row), self._registry)
