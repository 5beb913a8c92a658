"""World-space sampling with trilinear interpolation."""

from __future__ import annotations

import math
from typing import Sequence

from sparsevox.grid import Coord, Grid


def sample_trilinear(grid: Grid, world_pos: Sequence[float]) -> float:
    """Blend the eight voxels around a world position with trilinear weights."""
    ix, iy, iz = grid.transform.world_to_index_f64(world_pos)
    bx, by, bz = math.floor(ix), math.floor(iy), math.floor(iz)
    fx, fy, fz = ix - bx, iy - by, iz - bz

    c000 = grid.get(Coord(bx, by, bz))
    c100 = grid.get(Coord(bx + 1, by, bz))
    c010 = grid.get(Coord(bx, by + 1, bz))
    c110 = grid.get(Coord(bx + 1, by + 1, bz))
    c001 = grid.get(Coord(bx, by, bz + 1))
    c101 = grid.get(Coord(bx + 1, by, bz + 1))
    c011 = grid.get(Coord(bx, by + 1, bz + 1))
    c111 = grid.get(Coord(bx + 1, by + 1, bz + 1))

    c00 = c000 * (1.0 - fx) + c100 * fx
    c01 = c001 * (1.0 - fx) + c101 * fx
    c10 = c010 * (1.0 - fx) + c110 * fx
    c11 = c011 * (1.0 - fx) + c111 * fx

    c0 = c00 * (1.0 - fy) + c10 * fy
    c1 = c01 * (1.0 - fy) + c11 * fy

    return c0 * (1.0 - fz) + c1 * fz