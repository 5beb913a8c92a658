"""Conversion of a triangle mesh into a narrow-band level-set grid.

Distances come from a brute-force search for the closest triangle; the sign
comes from the angle-weighted pseudo-normal at the closest point.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from sparsevox.grid import Coord, Grid, GridClass, Transform

Vec3 = tuple[float, float, float]


@dataclass
class TriMesh:
    """Indexed triangle mesh: vertex positions and vertex-index triples."""

    vertices: Sequence[Sequence[float]] = field(default_factory=list)
    triangles: Sequence[Sequence[int]] = field(default_factory=list)


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _scale(a: Sequence[float], s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Sequence[float]) -> float:
    return math.sqrt(_dot(a, a))


def _angle_between(a: Sequence[float], b: Sequence[float]) -> float:
    la = _length(a)
    lb = _length(b)
    if la < 1e-30 or lb < 1e-30:
        return 0.0
    cos_theta = max(-1.0, min(1.0, _dot(a, b) / (la * lb)))
    return math.acos(cos_theta)


def _aabb(vertices: Sequence[Sequence[float]]) -> tuple[Vec3, Vec3]:
    xs, ys, zs = zip(*((v[0], v[1], v[2]) for v in vertices))
    return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))


def _vertex_normals(mesh: TriMesh) -> list[Vec3]:
    """Angle-weighted sums of unit face normals, normalised per vertex."""
    sums = [[0.0, 0.0, 0.0] for _ in mesh.vertices]

    for i0, i1, i2 in mesh.triangles:
        v0, v1, v2 = mesh.vertices[i0], mesh.vertices[i1], mesh.vertices[i2]
        e01 = _sub(v1, v0)
        e02 = _sub(v2, v0)
        e12 = _sub(v2, v1)

        face_normal = _cross(e01, e02)
        area = _length(face_normal)
        if area < 1e-30:
            continue
        unit = _scale(face_normal, 1.0 / area)

        angles = (
            _angle_between(e01, e02),
            _angle_between(_sub(v0, v1), e12),
            _angle_between(_sub(v0, v2), _sub(v1, v2)),
        )
        for index, angle in zip((i0, i1, i2), angles):
            acc = sums[index]
            for d in range(3):
                acc[d] += unit[d] * angle

    normals: list[Vec3] = []
    for acc in sums:
        length = _length(acc)
        if length > 1e-30:
            normals.append(_scale(acc, 1.0 / length))
        else:
            normals.append((acc[0], acc[1], acc[2]))
    return normals


def _closest_point_on_triangle(
    p: Sequence[float],
    v0: Sequence[float],
    v1: Sequence[float],
    v2: Sequence[float],
) -> tuple[Vec3, Vec3]:
    """Closest point of triangle ``v0 v1 v2`` to ``p`` and its barycentric weights."""
    ab = _sub(v1, v0)
    ac = _sub(v2, v0)
    ap = _sub(p, v0)

    d1 = _dot(ab, ap)
    d2 = _dot(ac, ap)
    if d1 <= 0.0 and d2 <= 0.0:
        return tuple(v0), (1.0, 0.0, 0.0)  # type: ignore[return-value]

    bp = _sub(p, v1)
    d3 = _dot(ab, bp)
    d4 = _dot(ac, bp)
    if d3 >= 0.0 and d4 <= d3:
        return tuple(v1), (0.0, 1.0, 0.0)  # type: ignore[return-value]

    vc = d1 * d4 - d3 * d2
    if vc <= 0.0 and d1 >= 0.0 and d3 <= 0.0:
        v = d1 / (d1 - d3)
        return _add(v0, _scale(ab, v)), (1.0 - v, v, 0.0)

    cp = _sub(p, v2)
    d5 = _dot(ab, cp)
    d6 = _dot(ac, cp)
    if d6 >= 0.0 and d5 <= d6:
        return tuple(v2), (0.0, 0.0, 1.0)  # type: ignore[return-value]

    vb = d5 * d2 - d1 * d6
    if vb <= 0.0 and d2 >= 0.0 and d6 <= 0.0:
        w = d2 / (d2 - d6)
        return _add(v0, _scale(ac, w)), (1.0 - w, 0.0, w)

    va = d3 * d6 - d5 * d4
    if va <= 0.0 and (d4 - d3) >= 0.0 and (d5 - d6) >= 0.0:
        w = (d4 - d3) / ((d4 - d3) + (d5 - d6))
        return _add(v1, _scale(_sub(v2, v1), w)), (0.0, 1.0 - w, w)

    denom = 1.0 / (va + vb + vc)
    v = vb * denom
    w = vc * denom
    return _add(v0, _add(_scale(ab, v), _scale(ac, w))), (1.0 - v - w, v, w)


def _distance_and_sign(
    mesh: TriMesh, normals: Sequence[Vec3], p: Vec3
) -> tuple[float, float]:
    best_dist_sq = math.inf
    best_sign = 1.0

    for i0, i1, i2 in mesh.triangles:
        closest, (b0, b1, b2) = _closest_point_on_triangle(
            p, mesh.vertices[i0], mesh.vertices[i1], mesh.vertices[i2]
        )
        diff = _sub(p, closest)
        dist_sq = _dot(diff, diff)
        if dist_sq < best_dist_sq:
            best_dist_sq = dist_sq
            n0, n1, n2 = normals[i0], normals[i1], normals[i2]
            pseudo = (
                n0[0] * b0 + n1[0] * b1 + n2[0] * b2,
                n0[1] * b0 + n1[1] * b1 + n2[1] * b2,
                n0[2] * b0 + n1[2] * b1 + n2[2] * b2,
            )
            best_sign = 1.0 if _dot(diff, pseudo) >= 0.0 else -1.0

    return math.sqrt(best_dist_sq), best_sign


def mesh_to_level_set(mesh: TriMesh, voxel_size: float, half_width: float) -> Grid:
    """Signed distance grid of ``mesh``, storing voxels with |sdf| < half_width * voxel_size.

    ``half_width`` is in voxels. Outside is positive, inside negative.
    """
    band = half_width * voxel_size
    grid = Grid(band, voxel_size)
    grid.grid_class = GridClass.LEVEL_SET
    grid.name = "sdf"
    grid.transform = Transform.uniform(voxel_size)

    if not mesh.vertices or not mesh.triangles:
        return grid

    normals = _vertex_normals(mesh)
    (x0, y0, z0), (x1, y1, z1) = _aabb(mesh.vertices)
    inv = 1.0 / voxel_size

    i_range = range(math.floor((x0 - band) * inv), math.ceil((x1 + band) * inv) + 1)
    j_range = range(math.floor((y0 - band) * inv), math.ceil((y1 + band) * inv) + 1)
    k_range = range(math.floor((z0 - band) * inv), math.ceil((z1 + band) * inv) + 1)

    for i in i_range:
        px = i * voxel_size
        for j in j_range:
            py = j * voxel_size
            for k in k_range:
                p = (px, py, k * voxel_size)
                dist, sign = _distance_and_sign(mesh, normals, p)
                sdf = dist * sign
                if abs(sdf) < band:
                    grid.set(Coord(i, j, k), sdf)

    return grid