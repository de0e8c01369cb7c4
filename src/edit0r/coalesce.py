"""Segment coalescing -- per-character faces to same-face runs.

Runs are what the render layer draws. They are derived data: recomputing
them from the grid must always give the same answer.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from edit0r.faces import DEFAULT_FACE_ID, Face, FaceId, FaceRegistry
from edit0r.grid import GridInvariantError

# Text drawn for the synthetic run of an empty line.
EMPTY_LINE_TEXT = " "


class Run(NamedTuple):
    face_id: FaceId
    start: int
    length: int


def coalesce(line: str, face_row: Sequence[FaceId]) -> list[Run]:
    """Split *line* into maximal runs of equal face id.

    The runs partition ``[0, len(line))`` in order, and no two neighbours
    share a face id. An empty line yields a single one-column run with the
    default face so there is still something to draw.
    """
    n = len(line)
    if len(face_row) != n:
        raise GridInvariantError(f"{len(face_row)} faces for {n} characters")
    if n == 0:
        return [Run(DEFAULT_FACE_ID, 0, 1)]

    runs: list[Run] = []
    start = 0
    current = face_row[0]
    for col in range(1, n):
        face_id = face_row[col]
        if face_id != current:
            runs.append(Run(current, start, col - start))
            start = col
            current = face_id
    runs.append(Run(current, start, n - start))
    return runs


def styled_segments(
    line: str, face_row: Sequence[FaceId], registry: FaceRegistry
) -> list[tuple[Face, str]]:
    """Resolve the runs of *line* to ``(Face, text)`` pairs."""
    return resolve_runs(line, coalesce(line, face_row), registry)


def resolve_runs(line: str, runs: Sequence[Run], registry: FaceRegistry) -> list[tuple[Face, str]]:
    if not line:
        return [(registry.face_for_id(runs[0].face_id), EMPTY_LINE_TEXT)]
    return [
        (registry.face_for_id(run.face_id), line[run.start : run.start + run.length])
        for run in runs
    ]
