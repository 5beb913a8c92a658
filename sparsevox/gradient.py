"""Finite-difference differential operators on scalar grids.

All derivatives are central differences in index space; divide by the
voxel size to obtain world-space quantities.
"""

from __future__ import annotations

import math

from sparsevox.grid import Coord, Grid


def gradient_at(grid: Grid, coord: Coord) -> tuple[float, float, float]:
    """Index-space gradient ``(df/dx, df/dy, df/dz)`` at ``coord``."""
    x, y, z = coord
    get = grid.get
    return (
        (get(Coord(x + 1, y, z)) - get(Coord(x - 1, y, z))) * 0.5,
        (get(Coord(x, y + 1, z)) - get(Coord(x, y - 1, z))) * 0.5,
        (get(Coord(x, y, z + 1)) - get(Coord(x, y, z - 1))) * 0.5,
    )


def gradient_field(grid: Grid) -> tuple[Grid, Grid, Grid]:
    """Gradient components of every active voxel as three grids ``(gx, gy, gz)``.

    The output grids share the input's transform and have a zero background.
    """
    gx = Grid.with_transform(0.0, grid.transform)
    gy = Grid.with_transform(0.0, grid.transform)
    gz = Grid.with_transform(0.0, grid.transform)

    for coord in [coord for coord, _ in grid.iter_active()]:
        dx, dy, dz = gradient_at(grid, coord)
        gx.set(coord, dx)
        gy.set(coord, dy)
        gz.set(coord, dz)

    return gx, gy, gz


def laplacian_at(grid: Grid, coord: Coord) -> float:
    """Seven-point Laplacian at ``coord`` in index space."""
    x, y, z = coord
    get = grid.get
    center = get(coord)
    d2x = get(Coord(x + 1, y, z)) - 2.0 * center + get(Coord(x - 1, y, z))
    d2y = get(Coord(x, y + 1, z)) - 2.0 * center + get(Coord(x, y - 1, z))
    d2z = get(Coord(x, y, z + 1)) - 2.0 * center + get(Coord(x, y, z - 1))
    return d2x + d2y + d2z


def mean_curvature_at(grid: Grid, coord: Coord) -> float:
    """Mean curvature ``div(grad(phi) / |grad(phi)|)`` at ``coord``.

    This is the sum of the principal curvatures (``2/R`` on a sphere of
    radius ``R`` voxels). Returns 0.0 where the gradient vanishes.
    """
    x, y, z = coord
    get = grid.get

    phi_x = (get(Coord(x + 1, y, z)) - get(Coord(x - 1, y, z))) * 0.5
    phi_y = (get(Coord(x, y + 1, z)) - get(Coord(x, y - 1, z))) * 0.5
    phi_z = (get(Coord(x, y, z + 1)) - get(Coord(x, y, z - 1))) * 0.5

    center = get(coord)
    phi_xx = get(Coord(x + 1, y, z)) - 2.0 * center + get(Coord(x - 1, y, z))
    phi_yy = get(Coord(x, y + 1, z)) - 2.0 * center + get(Coord(x, y - 1, z))
    phi_zz = get(Coord(x, y, z + 1)) - 2.0 * center + get(Coord(x, y, z - 1))

    phi_xy = (
        get(Coord(x + 1, y + 1, z))
        - get(Coord(x + 1, y - 1, z))
        - get(Coord(x - 1, y + 1, z))
        + get(Coord(x - 1, y - 1, z))
    ) * 0.25
    phi_xz = (
        get(Coord(x + 1, y, z + 1))
        - get(Coord(x + 1, y, z - 1))
        - get(Coord(x - 1, y, z + 1))
        + get(Coord(x - 1, y, z - 1))
    ) * 0.25
    phi_yz = (
        get(Coord(x, y + 1, z + 1))
        - get(Coord(x, y + 1, z - 1))
        - get(Coord(x, y - 1, z + 1))
        + get(Coord(x, y - 1, z - 1))
    ) * 0.25

    grad_mag_sq = phi_x * phi_x + phi_y * phi_y + phi_z * phi_z
    grad_mag = math.sqrt(grad_mag_sq)
    if grad_mag < 1e-10:
        return 0.0

    numerator = (
        phi_xx * (phi_y * phi_y + phi_z * phi_z)
        + phi_yy * (phi_x * phi_x + phi_z * phi_z)
        + phi_zz * (phi_x * phi_x + phi_y * phi_y)
        - 2.0 * (phi_x * phi_y * phi_xy + phi_x * phi_z * phi_xz + phi_y * phi_z * phi_yz)
    )
    return numerator / (grad_mag_sq * grad_mag)