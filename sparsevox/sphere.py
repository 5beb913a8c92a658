"""Narrow-band level-set sphere generator."""

from __future__ import annotations

import math
from typing import Sequence

from sparsevox.grid import Coord, Grid, GridClass, Transform


def make_level_set_sphere(
    radius: float,
    center: Sequence[float],
    voxel_size: float,
    half_width: float,
) -> Grid:
    """Build a sphere SDF, storing only voxels with |sdf| < half_width * voxel_size.

    ``radius`` and ``center`` are in world units, ``half_width`` in voxels.
    """
    band = half_width * voxel_size
    grid = Grid(band, voxel_size)
    grid.grid_class = GridClass.LEVEL_SET
    grid.name = "sdf"
    grid.transform = Transform.uniform(voxel_size)

    extent = radius + band
    inv = 1.0 / voxel_size
    cx, cy, cz = center
    i_range = range(math.floor((cx - extent) * inv), math.ceil((cx + extent) * inv) + 1)
    j_range = range(math.floor((cy - extent) * inv), math.ceil((cy + extent) * inv) + 1)
    k_range = range(math.floor((cz - extent) * inv), math.ceil((cz + extent) * inv) + 1)

    for i in i_range:
        wx = i * voxel_size - cx
        for j in j_range:
            wy = j * voxel_size - cy
            for k in k_range:
                wz = k * voxel_size - cz
                sdf = math.sqrt(wx * wx + wy * wy + wz * wz) - radius
                if abs(sdf) < band:
                    grid.set(Coord(i, j, k), sdf)

    return grid