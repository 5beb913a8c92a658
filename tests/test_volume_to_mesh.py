import math

import pytest

from sparsevox.grid import Coord, Grid
from sparsevox.sphere import make_level_set_sphere
from sparsevox.volume_to_mesh import Mesh, volume_to_mesh


@pytest.fixture(scope="module")
def sphere_mesh():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    return volume_to_mesh(grid, 0.0)


def test_sphere_to_mesh_produces_triangles(sphere_mesh):
    assert sphere_mesh.tri_count() > 0
    assert sphere_mesh.vertex_count() > 0


def test_sphere_mesh_vertex_count_reasonable(sphere_mesh):
    assert sphere_mesh.tri_count() > 50
    assert sphere_mesh.tri_count() < 100_000


def test_sphere_mesh_is_watertight(sphere_mesh):
    assert sphere_mesh.is_watertight()


def test_sphere_mesh_indices_valid(sphere_mesh):
    n = sphere_mesh.vertex_count()
    assert all(0 <= idx < n for tri in sphere_mesh.triangles for idx in tri)


def test_sphere_mesh_vertices_near_surface():
    radius = 5.0
    grid = make_level_set_sphere(radius, (0.0, 0.0, 0.0), 0.5, 5.0)
    mesh = volume_to_mesh(grid, 0.0)
    near = sum(1 for v in mesh.vertices if abs(math.sqrt(sum(c * c for c in v)) - radius) < 1.0)
    assert near / mesh.vertex_count() > 0.75


def test_empty_grid_produces_no_mesh():
    grid = Grid(3.0, 1.0)
    mesh = volume_to_mesh(grid, 0.0)
    assert mesh.tri_count() == 0
    assert mesh.vertex_count() == 0


def test_is_watertight_tetrahedron():
    mesh = Mesh(
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)],
        triangles=[(0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3)],
    )
    assert mesh.is_watertight()
    assert mesh.tri_count() == 4
    assert mesh.vertex_count() == 4


def test_single_triangle_is_not_watertight():
    mesh = Mesh(vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)], triangles=[(0, 1, 2)])
    assert not mesh.is_watertight()