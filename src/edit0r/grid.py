"""Per-character face grid kept in lockstep with the buffer lines."""

from __future__ import annotations

from typing import Iterator, Sequence

from edit0r.faces import DEFAULT_FACE_ID, FaceId


class GridInvariantError(AssertionError):
    """A face row no longer matches its line length.

    Always a defect in whatever wrote to the grid. Never caught by the core.
    """


class Grid:
    """One FaceId per character of every line.

    Rows are only ever written through ``set_range`` / ``fill``, which keep
    each row's length fixed. ``version`` increases on every effective write
    so derived data (coalesced runs) can be cached against it.
    """

    def __init__(self, lines: Sequence[str], rows: list[list[FaceId]]) -> None:
        self._lines = tuple(lines)
        self._rows = rows
        self.version = 0
        self.assert_invariant()

    @classmethod
    def initialize(cls, lines: Sequence[str]) -> Grid:
        """Create a grid with every cell set to the default face."""
        return cls(lines, [[DEFAULT_FACE_ID] * len(line) for line in lines])

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    def row(self, index: int) -> list[FaceId]:
        return self._rows[index]

    def assert_invariant(self) -> None:
        if len(self._rows) != len(self._lines):
            raise GridInvariantError(
                f"Grid has {len(self._rows)} rows for {len(self._lines)} lines"
            )
        for index, (line, row) in enumerate(zip(self._lines, self._rows)):
            if len(row) != len(line):
                raise GridInvariantError(
                    f"Row {index}: {len(row)} faces for {len(line)} characters"
                )

    def set_range(self, row: int, col_start: int, col_end: int, face_id: FaceId) -> None:
        """Overwrite the half-open range ``[col_start, col_end)`` on *row*.

        The range is clamped to the line. Rows outside the buffer and ranges
        that are empty after clamping are ignored.
        """
        if not 0 <= row < len(self._rows):
            return
        cells = self._rows[row]
        start = max(0, col_start)
        end = min(len(cells), col_end)
        if start >= end:
            return
        cells[start:end] = [face_id] * (end - start)
        self.version += 1

    def fill(self, face_id: FaceId = DEFAULT_FACE_ID) -> None:
        """Reset every cell to *face_id*."""
        for cells in self._rows:
            cells[:] = [face_id] * len(cells)
        self.version += 1

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[list[FaceId]]:
        return iter(self._rows)
