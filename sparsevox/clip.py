"""Spatial clip and crop of sparse grids against a coordinate box."""

from __future__ import annotations

from sparsevox.grid import CoordBBox, Grid


def clip_to_bbox(grid: Grid, bbox: CoordBBox) -> Grid:
    """New grid holding only the active voxels of ``grid`` inside ``bbox``.

    The result shares the transform, name and class of ``grid``.
    """
    out = Grid.with_transform(grid.background, grid.transform)
    out.name = grid.name
    out.grid_class = grid.grid_class
    for coord, value in grid.iter_active():
        if bbox.contains(coord):
            out.set(coord, value)
    return out


def crop_in_place(grid: Grid, bbox: CoordBBox) -> None:
    """Deactivate active voxels outside ``bbox`` and prune emptied leaves."""
    outside = [coord for coord, _ in grid.iter_active() if not bbox.contains(coord)]
    for coord in outside:
        grid.deactivate(coord)
    grid.remove_empty_leaves()