"""Grid index <-> world-space geometry.

Pure functions, no state. The playing field is a plane of
``plane_width x plane_height`` world units divided into
``dims.width x dims.height`` cells; positions are measured from the plane's
corner unless noted otherwise.
"""
from __future__ import annotations
from typing import List, Tuple

from config import get_grid_size, get_plane_size
from ..errors import IndexOutOfBounds, InvalidDimensions
from .model.base import GridDimensions

__all__ = [
    "cell_size",
    "grid_line_positions",
    "cell_center",
    "centered_cell_center",
    "default_dimensions",
    "default_cell_size",
]


def _check_dims(dims: GridDimensions) -> None:
    if dims.width <= 0 or dims.height <= 0:
        raise InvalidDimensions(dims.width, dims.height)


def cell_size(dims: GridDimensions, plane_width: float, plane_height: float) -> Tuple[float, float]:
    if dims.width <= 0 or dims.height <= 0 or plane_width <= 0 or plane_height <= 0:
        raise InvalidDimensions(dims.width, dims.height, plane_width, plane_height)
    return plane_width / dims.width, plane_height / dims.height


def grid_line_positions(dims: GridDimensions, cell_width: float, cell_height: float) -> Tuple[List[float], List[float]]:
    """Overlay line coordinates: N+1 boundary lines bound N cells on each axis."""
    _check_dims(dims)
    xs = [i * cell_width for i in range(dims.width + 1)]
    ys = [i * cell_height for i in range(dims.height + 1)]
    return xs, ys


def cell_center(row: int, col: int, cell_width: float, cell_height: float, dims: GridDimensions | None = None) -> Tuple[float, float]:
    if dims is None:
        dims = default_dimensions()
    if not (0 <= row < dims.height) or not (0 <= col < dims.width):
        raise IndexOutOfBounds(row, col, dims.width, dims.height)
    return (col + 0.5) * cell_width, (row + 0.5) * cell_height


def centered_cell_center(row: int, col: int, dims: GridDimensions, plane_width: float, plane_height: float) -> Tuple[float, float]:
    """Cell center on a plane centred at the origin, as the entity spawner places tiles."""
    cw, ch = cell_size(dims, plane_width, plane_height)
    x, y = cell_center(row, col, cw, ch, dims)
    return x - plane_width / 2.0, y - plane_height / 2.0


def default_dimensions() -> GridDimensions:
    width, height = get_grid_size()
    return GridDimensions(width, height)


def default_cell_size() -> Tuple[float, float]:
    plane_width, plane_height = get_plane_size()
    return cell_size(default_dimensions(), plane_width, plane_height)
