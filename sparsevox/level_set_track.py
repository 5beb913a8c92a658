"""Narrow-band maintenance and velocity extension for level-set grids.

After advection or CSG the band can develop holes or hold voxels beyond the
wanted half-width; these helpers restore it without a full re-initialisation.
"""

from __future__ import annotations

import math

from sparsevox.grid import Coord, Grid

_NEIGHBORS_6 = (
    Coord(1, 0, 0),
    Coord(-1, 0, 0),
    Coord(0, 1, 0),
    Coord(0, -1, 0),
    Coord(0, 0, 1),
    Coord(0, 0, -1),
)


def _dist_sq(a: Coord, b: Coord) -> int:
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return dx * dx + dy * dy + dz * dz


def find_zero_crossings(grid: Grid) -> list[Coord]:
    """Active voxels that lie on or straddle the zero level set.

    A voxel qualifies if its value is exactly zero or if an active face
    neighbour has the opposite sign. Inactive neighbours are ignored so the
    background at the band's outer edge produces no spurious crossings.
    """
    crossings: list[Coord] = []
    for coord, value in grid.iter_active():
        if value == 0.0:
            crossings.append(coord)
            continue
        for offset in _NEIGHBORS_6:
            neighbor = coord + offset
            if grid.is_active(neighbor) and value * grid.get(neighbor) < 0.0:
                crossings.append(coord)
                break
    return crossings


def trim_narrow_band(grid: Grid, half_width: float) -> None:
    """Deactivate voxels with ``|value| >= half_width * voxel_size``.

    ``half_width`` is in voxels. Leaves left empty are removed.
    """
    threshold = half_width * grid.voxel_size
    outside = [coord for coord, value in grid.iter_active() if abs(value) >= threshold]
    for coord in outside:
        grid.deactivate(coord)
    grid.remove_empty_leaves()


def rebuild_narrow_band(grid: Grid, half_width: float) -> None:
    """Recompute band values as distances to the nearest zero-crossing voxel.

    Each active voxel keeps the sign of its old value and takes the Euclidean
    index-space distance to the closest crossing, scaled by the voxel size.
    Voxels whose new distance reaches ``half_width * voxel_size`` are
    deactivated. A grid without crossings is left unchanged.
    """
    voxel_size = grid.voxel_size
    band = half_width * voxel_size

    crossings = find_zero_crossings(grid)
    if not crossings:
        return

    for coord, old_value in list(grid.iter_active()):
        sign = 1.0 if old_value >= 0.0 else -1.0
        min_dist = min(math.sqrt(_dist_sq(coord, c)) for c in crossings)
        new_value = sign * min_dist * voxel_size
        if abs(new_value) < band:
            grid.set(coord, new_value)
        else:
            grid.deactivate(coord)

    grid.remove_empty_leaves()


def extend_velocity(sdf: Grid, vx: Grid, vy: Grid, vz: Grid, half_width: float) -> None:
    """Copy interface velocities out to the rest of the narrow band.

    Interface voxels (``|sdf| < voxel_size``) keep their velocity; every other
    band voxel (``|sdf| < half_width * voxel_size``) receives the velocity of
    the nearest interface voxel. The velocity grids are modified in place.
    """
    voxel_size = sdf.voxel_size
    band = half_width * voxel_size

    interface = [coord for coord, value in sdf.iter_active() if abs(value) < voxel_size]
    if not interface:
        return

    band_voxels = [
        coord
        for coord, value in sdf.iter_active()
        if voxel_size <= abs(value) < band
    ]

    for coord in band_voxels:
        source = min(interface, key=lambda c: _dist_sq(coord, c))
        vx.set(coord, vx.get(source))
        vy.set(coord, vy.get(source))
        vz.set(coord, vz.get(source))