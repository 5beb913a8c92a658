"""Smoothing filters for scalar grids."""

from __future__ import annotations

import statistics

from sparsevox.grid import Coord, Grid

_NEIGHBORS_6 = (
    Coord(1, 0, 0),
    Coord(-1, 0, 0),
    Coord(0, 1, 0),
    Coord(0, -1, 0),
    Coord(0, 0, 1),
    Coord(0, 0, -1),
)


def _stencil(grid: Grid, coord: Coord, value: float) -> list[float]:
    return [value, *(grid.get(coord + off) for off in _NEIGHBORS_6)]


def mean_filter(grid: Grid, iterations: int) -> None:
    """Replace each active voxel by the mean of itself and its six face neighbours.

    Each of the ``iterations`` passes reads the grid as it was before the pass.
    """
    for _ in range(iterations):
        updates = [
            (coord, sum(_stencil(grid, coord, value)) / 7.0)
            for coord, value in grid.iter_active()
        ]
        for coord, value in updates:
            grid.set(coord, value)


def median_filter(grid: Grid, iterations: int) -> None:
    """Replace each active voxel by the median of itself and its six face neighbours."""
    for _ in range(iterations):
        updates = [
            (coord, statistics.median(_stencil(grid, coord, value)))
            for coord, value in grid.iter_active()
        ]
        for coord, value in updates:
            grid.set(coord, value)