"""Isosurface extraction from a scalar grid with marching cubes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from sparsevox.grid import LEAF_DIM, Coord, Grid
from sparsevox.mc_tables import EDGE_ENDPOINTS, edge_mask, triangle_edges

Vertex = tuple[float, float, float]
Triangle = tuple[int, int, int]

_CORNER_OFFSETS = (
    Coord(0, 0, 0),
    Coord(1, 0, 0),
    Coord(1, 1, 0),
    Coord(0, 1, 0),
    Coord(0, 0, 1),
    Coord(1, 0, 1),
    Coord(1, 1, 1),
    Coord(0, 1, 1),
)

_LEAF_NEIGHBOURS = (
    Coord(-LEAF_DIM, 0, 0),
    Coord(LEAF_DIM, 0, 0),
    Coord(0, -LEAF_DIM, 0),
    Coord(0, LEAF_DIM, 0),
    Coord(0, 0, -LEAF_DIM),
    Coord(0, 0, LEAF_DIM),
)


@dataclass
class Mesh:
    """Indexed triangle mesh."""

    vertices: list[Vertex] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)

    def tri_count(self) -> int:
        return len(self.triangles)

    def vertex_count(self) -> int:
        return len(self.vertices)

    def is_watertight(self) -> bool:
        """True when every edge is shared by exactly two triangles."""
        edges = Counter(
            (min(a, b), max(a, b))
            for tri in self.triangles
            for a, b in ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0]))
        )
        return all(count == 2 for count in edges.values())


class _Extractor:
    def __init__(self, grid: Grid, isovalue: float) -> None:
        self.grid = grid
        self.isovalue = isovalue
        self.voxel_size = grid.transform.voxel_size
        self.mesh = Mesh()
        self.edge_cache: dict[tuple[Coord, Coord], int] = {}

    def _edge_vertex(self, ca: Coord, cb: Coord, va: float, vb: float) -> int:
        key = (ca, cb) if ca < cb else (cb, ca)
        index = self.edge_cache.get(key)
        if index is not None:
            return index
        diff = vb - va
        t = (self.isovalue - va) / diff if abs(diff) > 1e-10 else 0.5
        vs = self.voxel_size
        pos = (
            (ca.x + t * (cb.x - ca.x)) * vs,
            (ca.y + t * (cb.y - ca.y)) * vs,
            (ca.z + t * (cb.z - ca.z)) * vs,
        )
        index = len(self.mesh.vertices)
        self.mesh.vertices.append(pos)
        self.edge_cache[key] = index
        return index

    def process_cell(self, base: Coord) -> None:
        corners = [base + off for off in _CORNER_OFFSETS]
        values = [self.grid.get(c) for c in corners]
        cube_index = sum(1 << i for i, v in enumerate(values) if v < self.isovalue)

        mask = edge_mask(cube_index)
        if not mask:
            return

        edge_verts: dict[int, int] = {}
        for e, (a, b) in enumerate(EDGE_ENDPOINTS):
            if mask & (1 << e):
                edge_verts[e] = self._edge_vertex(corners[a], corners[b], values[a], values[b])

        for e0, e1, e2 in triangle_edges(cube_index):
            self.mesh.triangles.append((edge_verts[e0], edge_verts[e1], edge_verts[e2]))


def volume_to_mesh(grid: Grid, isovalue: float = 0.0) -> Mesh:
    """Extract the ``isovalue`` surface of ``grid`` as a triangle mesh.

    Every cell of each leaf and of its six face-adjacent leaf tiles is
    classified; vertices on shared edges are reused. Vertex positions are
    index coordinates scaled by the voxel size.
    """
    origins = grid.leaf_origins()
    cell_origins = sorted(
        {origin for origin in origins}
        | {origin + delta for origin in origins for delta in _LEAF_NEIGHBOURS}
    )

    extractor = _Extractor(grid, isovalue)
    for origin in cell_origins:
        for lx in range(LEAF_DIM):
            for ly in range(LEAF_DIM):
                for lz in range(LEAF_DIM):
                    extractor.process_cell(origin + Coord(lx, ly, lz))
    return extractor.mesh