from sparsevox.grid import Coord, GridClass
from sparsevox.sphere import make_level_set_sphere


def test_sphere_has_active_voxels():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    assert grid.active_voxel_count() > 0
    assert grid.grid_class is GridClass.LEVEL_SET


def test_sphere_sdf_value_at_center_is_negative():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    assert grid.get(Coord(3, 0, 0)) < 0.0


def test_sphere_sdf_value_outside_is_positive():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    assert grid.get(Coord(7, 0, 0)) > 0.0


def test_sphere_sdf_value_on_surface_is_near_zero():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    assert abs(grid.get(Coord(5, 0, 0))) < 0.5


def test_sphere_narrow_band_width():
    grid = make_level_set_sphere(10.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    assert grid.get(Coord(20, 0, 0)) == grid.background


def test_sphere_with_offset_center():
    grid = make_level_set_sphere(3.0, (10.0, 20.0, 30.0), 0.5, 3.0)
    assert grid.active_voxel_count() > 0
    assert abs(grid.get(Coord(26, 40, 60))) < 1.0


def test_sphere_stored_values_within_band():
    grid = make_level_set_sphere(4.0, (0.0, 0.0, 0.0), 1.0, 2.0)
    assert grid.name == "sdf"
    assert all(abs(v) < grid.background for _, v in grid.iter_active())