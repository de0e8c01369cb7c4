"""Tests for edit0r.grid.Grid -- per-character faces in lockstep with text."""

from __future__ import annotations

import pytest

from edit0r.grid import Grid, GridInvariantError


class TestGridInitialize:
    def test_one_default_cell_per_character(self) -> None:
        grid = Grid.initialize(["abc", "", "hello"])
        assert [list(row) for row in grid] == [[0, 0, 0], [], [0, 0, 0, 0, 0]]

    def test_empty_buffer_has_no_rows(self) -> None:
        grid = Grid.initialize([])
        assert len(grid) == 0
        grid.assert_invariant()

    def test_lines_are_kept(self) -> None:
        grid = Grid.initialize(["a", "bc"])
        assert grid.lines == ("a", "bc")


class TestGridInvariant:
    def test_holds_after_initialize(self) -> None:
        Grid.initialize(["abc", "de"]).assert_invariant()

    def test_mismatched_row_is_fatal(self) -> None:
        grid = Grid.initialize(["abc"])
        grid.row(0).append(0)  # simulate a buggy writer
        with pytest.raises(GridInvariantError, match="Row 0"):
            grid.assert_invariant()

    def test_constructor_rejects_bad_rows(self) -> None:
        with pytest.raises(GridInvariantError):
            Grid(["abc"], [[0, 0]])

    def test_constructor_rejects_row_count_mismatch(self) -> None:
        with pytest.raises(GridInvariantError):
            Grid(["abc", "d"], [[0, 0, 0]])

    def test_is_an_assertion_error(self) -> None:
        assert issubclass(GridInvariantError, AssertionError)


class TestGridSetRange:
    def test_overwrites_half_open_range(self) -> None:
        grid = Grid.initialize(["abcdef"])
        grid.set_range(0, 1, 4, 7)
        assert grid.row(0) == [0, 7, 7, 7, 0, 0]

    def test_clamps_past_end(self) -> None:
        grid = Grid.initialize(["abc"])
        grid.set_range(0, 1, 99, 5)
        assert grid.row(0) == [0, 5, 5]
        grid.assert_invariant()

    def test_clamps_negative_start(self) -> None:
        grid = Grid.initialize(["abc"])
        grid.set_range(0, -5, 2, 5)
        assert grid.row(0) == [5, 5, 0]

    def test_row_out_of_range_is_noop(self) -> None:
        grid = Grid.initialize(["abc"])
        grid.set_range(3, 0, 2, 5)
        grid.set_range(-1, 0, 2, 5)
        assert grid.row(0) == [0, 0, 0]

    def test_empty_or_inverted_range_is_noop(self) -> None:
        grid = Grid.initialize(["abc"])
        version = grid.version
        grid.set_range(0, 2, 2, 5)
        grid.set_range(0, 3, 1, 5)
        grid.set_range(0, 5, 9, 5)
        assert grid.row(0) == [0, 0, 0]
        assert grid.version == version

    def test_write_on_empty_line_is_noop(self) -> None:
        grid = Grid.initialize([""])
        grid.set_range(0, 0, 1, 5)
        assert grid.row(0) == []

    def test_last_write_wins(self) -> None:
        grid = Grid.initialize(["abcd"])
        grid.set_range(0, 0, 3, 1)
        grid.set_range(0, 2, 4, 2)
        assert grid.row(0) == [1, 1, 2, 2]

    def test_version_bumps_on_write(self) -> None:
        grid = Grid.initialize(["abc"])
        version = grid.version
        grid.set_range(0, 0, 1, 2)
        assert grid.version > version


class TestGridFill:
    def test_resets_every_cell(self) -> None:
        grid = Grid.initialize(["abc", "de"])
        grid.set_range(0, 0, 3, 4)
        grid.set_range(1, 0, 2, 4)
        grid.fill()
        assert [list(row) for row in grid] == [[0, 0, 0], [0, 0]]
        grid.assert_invariant()
