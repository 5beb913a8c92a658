"""Combining the active regions of sparse grids."""

from __future__ import annotations

from sparsevox.grid import Grid


def _empty_like(grid: Grid) -> Grid:
    out = Grid.with_transform(grid.background, grid.transform)
    out.name = grid.name
    out.grid_class = grid.grid_class
    return out


def merge_copy(src: Grid, dst: Grid) -> None:
    """Write every active voxel of ``src`` into ``dst``, overwriting overlaps."""
    for coord, value in src.iter_active():
        dst.set(coord, value)


def merge_union(a: Grid, b: Grid) -> Grid:
    """New grid active wherever ``a`` or ``b`` is; ``a`` wins at overlaps.

    The result shares ``a``'s transform, name and class.
    """
    out = _empty_like(a)
    for coord, value in b.iter_active():
        out.set(coord, value)
    for coord, value in a.iter_active():
        out.set(coord, value)
    return out


def merge_intersection(a: Grid, b: Grid) -> Grid:
    """New grid active only where both grids are, holding ``a``'s values.

    The result shares ``a``'s transform, name and class.
    """
    out = _empty_like(a)
    for coord, value in a.iter_active():
        if b.is_active(coord):
            out.set(coord, value)
    return out