"""Tests for grid index <-> world geometry."""

import pytest

from brickgrid.core.grid import (
    cell_center,
    cell_size,
    centered_cell_center,
    default_cell_size,
    default_dimensions,
    grid_line_positions,
)
from brickgrid.core.model.base import GridDimensions
from brickgrid.errors import IndexOutOfBounds, InvalidDimensions


class TestCellSize:

    def test_divides_plane_by_grid(self):
        assert cell_size(GridDimensions(20, 20), 40.0, 30.0) == (2.0, 1.5)

    @pytest.mark.parametrize("dims,pw,ph", [
        (GridDimensions(0, 20), 40.0, 30.0),
        (GridDimensions(20, -1), 40.0, 30.0),
        (GridDimensions(20, 20), 0.0, 30.0),
        (GridDimensions(20, 20), 40.0, -5.0),
    ])
    def test_invalid_inputs_raise(self, dims, pw, ph):
        with pytest.raises(InvalidDimensions):
            cell_size(dims, pw, ph)

    def test_default_uses_config(self, monkeypatch):
        monkeypatch.setenv("BG_GRID_WIDTH", "10")
        monkeypatch.setenv("BG_GRID_HEIGHT", "5")
        monkeypatch.setenv("BG_PLANE_WIDTH", "20")
        monkeypatch.setenv("BG_PLANE_HEIGHT", "10")
        assert default_dimensions() == GridDimensions(10, 5)
        assert default_cell_size() == (2.0, 2.0)


class TestGridLines:

    @pytest.mark.parametrize("width,height,pw,ph", [
        (20, 20, 100.0, 100.0),
        (20, 20, 40.0, 30.0),
        (3, 7, 10.0, 1.0),
        (1, 1, 0.5, 2.5),
    ])
    def test_fence_post_counts_and_span(self, width, height, pw, ph):
        dims = GridDimensions(width, height)
        cw, ch = cell_size(dims, pw, ph)
        xs, ys = grid_line_positions(dims, cw, ch)
        assert len(xs) == width + 1
        assert len(ys) == height + 1
        assert all(a < b for a, b in zip(xs, xs[1:]))
        assert all(a < b for a, b in zip(ys, ys[1:]))
        assert xs[0] == 0.0 and ys[0] == 0.0
        assert xs[-1] == pytest.approx(pw)
        assert ys[-1] == pytest.approx(ph)

    def test_twenty_by_twenty_on_hundred_plane(self):
        dims = GridDimensions(20, 20)
        cw, ch = cell_size(dims, 100.0, 100.0)
        xs, ys = grid_line_positions(dims, cw, ch)
        assert len(xs) == 21 and len(ys) == 21
        assert xs == [i * 5.0 for i in range(21)]
        assert ys == [i * 5.0 for i in range(21)]

    def test_invalid_dims(self):
        with pytest.raises(InvalidDimensions):
            grid_line_positions(GridDimensions(0, 4), 1.0, 1.0)


class TestCellCenter:

    def test_first_cell(self):
        dims = GridDimensions(20, 20)
        assert cell_center(0, 0, 2.0, 1.5, dims) == (1.0, 0.75)

    def test_last_cell_is_center_not_corner(self):
        dims = GridDimensions(20, 20)
        x, y = cell_center(19, 19, 2.0, 1.5, dims)
        assert x == pytest.approx(39.0)
        assert y == pytest.approx(29.25)
        assert x < 40.0 and y < 30.0

    def test_row_is_y_and_col_is_x(self):
        dims = GridDimensions(4, 2)
        assert cell_center(1, 3, 1.0, 10.0, dims) == (3.5, 15.0)

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (20, 0), (0, 20)])
    def test_out_of_range(self, row, col):
        with pytest.raises(IndexOutOfBounds):
            cell_center(row, col, 2.0, 1.5, GridDimensions(20, 20))

    def test_centered_plane(self):
        dims = GridDimensions(20, 20)
        assert centered_cell_center(0, 0, dims, 40.0, 30.0) == (-19.0, -14.25)
        x, y = centered_cell_center(19, 19, dims, 40.0, 30.0)
        assert x == pytest.approx(19.0)
        assert y == pytest.approx(14.25)
