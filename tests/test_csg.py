from sparsevox.csg import csg_difference, csg_intersection, csg_union
from sparsevox.grid import Coord, Grid, GridClass
from sparsevox.sphere import make_level_set_sphere


def test_union_of_two_spheres_has_more_voxels():
    s1 = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    s2 = make_level_set_sphere(5.0, (6.0, 0.0, 0.0), 1.0, 3.0)
    u = csg_union(s1, s2)
    assert u.active_voxel_count() >= s1.active_voxel_count()
    assert u.active_voxel_count() >= s2.active_voxel_count()
    assert u.grid_class is GridClass.LEVEL_SET


def test_intersection_of_overlapping_spheres():
    s1 = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    s2 = make_level_set_sphere(5.0, (4.0, 0.0, 0.0), 1.0, 3.0)
    isect = csg_intersection(s1, s2)
    count = isect.active_voxel_count()
    assert count <= s1.active_voxel_count() + s2.active_voxel_count()
    assert count > 0


def test_difference_removes_overlap():
    s1 = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    s2 = make_level_set_sphere(5.0, (4.0, 0.0, 0.0), 1.0, 3.0)
    diff = csg_difference(s1, s2)
    assert diff.get(Coord(3, 0, 0)) < 0.0
    assert diff.get(Coord(6, 0, 0)) > 0.0


def test_difference_values_at_known_points():
    s1 = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 1.0, 3.0)
    s2 = make_level_set_sphere(5.0, (4.0, 0.0, 0.0), 1.0, 3.0)
    diff = csg_difference(s1, s2)
    assert abs(diff.get(Coord(3, 0, 0)) - (-2.0)) < 1e-9
    assert abs(diff.get(Coord(6, 0, 0)) - 1.0) < 1e-9


def test_union_is_commutative():
    s1 = make_level_set_sphere(3.0, (0.0, 0.0, 0.0), 1.0, 2.0)
    s2 = make_level_set_sphere(3.0, (4.0, 0.0, 0.0), 1.0, 2.0)
    u1 = csg_union(s1, s2)
    u2 = csg_union(s2, s1)
    assert u1.active_voxel_count() == u2.active_voxel_count()
    assert dict(u1.iter_active()) == dict(u2.iter_active())


def test_union_takes_pointwise_minimum():
    s1 = make_level_set_sphere(3.0, (0.0, 0.0, 0.0), 1.0, 2.0)
    s2 = make_level_set_sphere(3.0, (4.0, 0.0, 0.0), 1.0, 2.0)
    u = csg_union(s1, s2)
    for coord, value in u.iter_active():
        assert value == min(s1.get(coord), s2.get(coord))


def test_background_follows_operation():
    a = Grid.level_set(1.0, 3.0)
    b = Grid.level_set(1.0, 2.0)
    assert csg_union(a, b).background == 2.0
    assert csg_intersection(a, b).background == 3.0
    assert csg_difference(a, b).background == 3.0


def test_empty_inputs_give_empty_output():
    a = Grid.level_set(1.0, 3.0)
    b = Grid.level_set(1.0, 3.0)
    assert csg_union(a, b).active_voxel_count() == 0
    assert csg_intersection(a, b).active_voxel_count() == 0


def test_output_keeps_first_transform():
    a = make_level_set_sphere(2.0, (0.0, 0.0, 0.0), 0.5, 2.0)
    b = make_level_set_sphere(2.0, (1.0, 0.0, 0.0), 0.5, 2.0)
    assert csg_union(a, b).transform == a.transform