"""Ray casting against level-set grids by stepping through index space."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from sparsevox.gradient import gradient_at
from sparsevox.grid import Coord, Grid

Vec3 = tuple[float, float, float]

_STEP_SIZE = 0.5
_MAX_STEPS = 2000


@dataclass(frozen=True)
class RayHit:
    """Where a ray meets the zero level set."""

    t: float
    position: Vec3
    normal: Vec3


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _nearest(point: Sequence[float]) -> Coord:
    return Coord(
        _round_half_away(point[0]),
        _round_half_away(point[1]),
        _round_half_away(point[2]),
    )


def ray_intersect(
    grid: Grid, origin: Sequence[float], direction: Sequence[float]
) -> RayHit | None:
    """First zero crossing of ``grid`` along a ray, or ``None``.

    The ray is walked in half-voxel steps (at most 2000) sampling the nearest
    voxel. A sign change between consecutive samples is refined by linear
    interpolation; a step landing exactly on zero is taken as the hit. The
    normal is the normalised gradient at whichever of the two voxels is closer
    to the surface, or the reversed ray direction where the gradient vanishes.
    ``direction`` need not be unit length; a zero direction yields ``None``.
    """
    length = math.sqrt(sum(c * c for c in direction[:3]))
    if length < 1e-15:
        return None
    d = (direction[0] / length, direction[1] / length, direction[2] / length)

    transform = grid.transform
    vs = transform.voxel_size
    orig_idx = transform.world_to_index_f64(origin)
    # Uniform scale keeps the index-space direction parallel to the world one.
    step_dir = d

    def point_at(t: float) -> Vec3:
        return (origin[0] + d[0] * t, origin[1] + d[1] * t, origin[2] + d[2] * t)

    prev_coord = _nearest(orig_idx)
    prev_val = grid.get(prev_coord)
    prev_t_world = 0.0

    for step in range(1, _MAX_STEPS + 1):
        t_idx = step * _STEP_SIZE
        curr_coord = _nearest(
            (
                orig_idx[0] + step_dir[0] * t_idx,
                orig_idx[1] + step_dir[1] * t_idx,
                orig_idx[2] + step_dir[2] * t_idx,
            )
        )
        curr_val = grid.get(curr_coord)
        t_world = t_idx * vs

        sign_change = (prev_val > 0.0 and curr_val < 0.0) or (
            prev_val < 0.0 and curr_val > 0.0
        )
        zero_hit = prev_val != 0.0 and curr_val == 0.0

        if sign_change or zero_hit:
            if zero_hit:
                hit_t = t_world
            else:
                frac = prev_val / (prev_val - curr_val)
                hit_t = prev_t_world + (t_world - prev_t_world) * frac

            normal_coord = prev_coord if abs(prev_val) < abs(curr_val) else curr_coord
            gx, gy, gz = gradient_at(grid, normal_coord)
            grad_len = math.sqrt(gx * gx + gy * gy + gz * gz)
            if grad_len > 1e-10:
                normal = (gx / grad_len, gy / grad_len, gz / grad_len)
            else:
                normal = (-d[0], -d[1], -d[2])

            return RayHit(t=hit_t, position=point_at(hit_t), normal=normal)

        prev_coord = curr_coord
        prev_val = curr_val
        prev_t_world = t_world

    return None