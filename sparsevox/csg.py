"""Level-set CSG as pointwise min/max of signed distances.

Union is ``min(a, b)``, intersection ``max(a, b)`` and difference
``max(a, -b)``.
"""

from __future__ import annotations

from typing import Callable

from sparsevox.grid import LEAF_DIM, Coord, Grid, GridClass

_TOLERANCE = 1e-12


def _combine(a: Grid, b: Grid, op: Callable[[float, float], float]) -> Grid:
    bg_out = op(a.background, b.background)
    out = Grid.with_transform(bg_out, a.transform)
    out.grid_class = GridClass.LEVEL_SET

    origins = sorted(set(a.leaf_origins()) | set(b.leaf_origins()))
    for origin in origins:
        for lx in range(LEAF_DIM):
            for ly in range(LEAF_DIM):
                for lz in range(LEAF_DIM):
                    coord = origin + Coord(lx, ly, lz)
                    combined = op(a.get(coord), b.get(coord))
                    if (
                        a.is_active(coord)
                        or b.is_active(coord)
                        or abs(combined - bg_out) > _TOLERANCE
                    ):
                        out.set(coord, combined)
    return out


def csg_union(a: Grid, b: Grid) -> Grid:
    """Union of two level sets: ``min(sdf_a, sdf_b)``."""
    return _combine(a, b, min)


def csg_intersection(a: Grid, b: Grid) -> Grid:
    """Intersection of two level sets: ``max(sdf_a, sdf_b)``."""
    return _combine(a, b, max)


def csg_difference(a: Grid, b: Grid) -> Grid:
    """``a`` minus ``b``: ``max(sdf_a, -sdf_b)``."""
    return _combine(a, b, lambda va, vb: max(va, -vb))