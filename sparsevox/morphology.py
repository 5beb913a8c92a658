"""Morphological operations on sparse grids: dilate, erode, opening, closing."""

from __future__ import annotations

from sparsevox.grid import Coord, Grid

_NEIGHBORS_6 = (
    Coord(1, 0, 0),
    Coord(-1, 0, 0),
    Coord(0, 1, 0),
    Coord(0, -1, 0),
    Coord(0, 0, 1),
    Coord(0, 0, -1),
)


def dilate(grid: Grid, iterations: int) -> None:
    """Activate the face neighbours of active voxels, ``iterations`` times.

    A newly activated voxel takes the value of the first active voxel, in
    iteration order, that reaches it.
    """
    for _ in range(iterations):
        active = list(grid.iter_active())
        for coord, value in active:
            for offset in _NEIGHBORS_6:
                neighbor = coord + offset
                if not grid.is_active(neighbor):
                    grid.set(neighbor, value)


def erode(grid: Grid, iterations: int) -> None:
    """Deactivate active voxels with an inactive face neighbour, ``iterations`` times.

    Deactivated voxels are reset to the background value.
    """
    for _ in range(iterations):
        boundary = [
            coord
            for coord, _ in grid.iter_active()
            if any(not grid.is_active(coord + offset) for offset in _NEIGHBORS_6)
        ]
        for coord in boundary:
            grid.deactivate(coord)


def opening(grid: Grid, iterations: int) -> None:
    """Erode then dilate, removing small protrusions."""
    erode(grid, iterations)
    dilate(grid, iterations)


def closing(grid: Grid, iterations: int) -> None:
    """Dilate then erode, filling small holes."""
    dilate(grid, iterations)
    erode(grid, iterations)