"""Tests for edit0r.coalesce -- same-face runs and resolved segments."""

from __future__ import annotations

import random

import pytest

from edit0r.coalesce import Run, coalesce, styled_segments
from edit0r.faces import DEFAULT_FACE_ID, INVALID_FACE, Face, FaceRegistry
from edit0r.grid import GridInvariantError


def _assert_partition(runs: list[Run], faces: list[int]) -> None:
    """Runs cover [0, n) in order, without gaps, and neighbours differ."""
    position = 0
    for run in runs:
        assert run.start == position
        assert run.length > 0
        assert all(f == run.face_id for f in faces[run.start : run.start + run.length])
        position += run.length
    assert position == len(faces)
    for left, right in zip(runs, runs[1:]):
        assert left.face_id != right.face_id


class TestCoalesce:
    def test_single_face_is_one_run(self) -> None:
        assert coalesce("hello", [0] * 5) == [Run(0, 0, 5)]

    def test_face_changes_split_runs(self) -> None:
        runs = coalesce("abcdef", [1, 1, 0, 0, 2, 2])
        assert runs == [Run(1, 0, 2), Run(0, 2, 2), Run(2, 4, 2)]

    def test_every_cell_different(self) -> None:
        assert coalesce("abc", [1, 2, 3]) == [Run(1, 0, 1), Run(2, 1, 1), Run(3, 2, 1)]

    def test_same_face_separated_by_other_is_not_merged(self) -> None:
        assert coalesce("aba", [1, 2, 1]) == [Run(1, 0, 1), Run(2, 1, 1), Run(1, 2, 1)]

    def test_empty_line_yields_synthetic_run(self) -> None:
        assert coalesce("", []) == [Run(DEFAULT_FACE_ID, 0, 1)]

    def test_length_mismatch_is_fatal(self) -> None:
        with pytest.raises(GridInvariantError):
            coalesce("abc", [0, 0])
        with pytest.raises(GridInvariantError):
            coalesce("", [0])

    def test_random_rows_partition(self) -> None:
        rng = random.Random(1234)
        for _ in range(200):
            n = rng.randint(1, 40)
            faces = [rng.choice([0, 1, 2]) for _ in range(n)]
            runs = coalesce("x" * n, faces)
            _assert_partition(runs, faces)
            assert sum(run.length for run in runs) == n


class TestStyledSegments:
    def test_slices_line_by_run(self) -> None:
        registry = FaceRegistry()
        keyword = Face(fg=(255, 0, 0))
        keyword_id = registry.register_or_update("keyword", keyword)
        segments = styled_segments("use foo", [keyword_id] * 3 + [0] * 4, registry)
        assert segments == [(keyword, "use"), (registry.face_for_id(0), " foo")]

    def test_empty_line_draws_a_space(self) -> None:
        registry = FaceRegistry()
        assert styled_segments("", [], registry) == [(registry.face_for_id(0), " ")]

    def test_unknown_id_uses_invalid_face(self) -> None:
        registry = FaceRegistry()
        assert styled_segments("ab", [99, 99], registry) == [(INVALID_FACE, "ab")]

    def test_segments_rebuild_the_line(self) -> None:
        registry = FaceRegistry()
        line = "let x = 5;"
        faces = [2, 2, 2, 0, 0, 0, 0, 0, 3, 3]
        assert "".join(text for _, text in styled_segments(line, faces, registry)) == line
