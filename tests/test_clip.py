from sparsevox.clip import clip_to_bbox, crop_in_place
from sparsevox.grid import Coord, CoordBBox, Grid, GridClass


def make_5x5x5():
    g = Grid(0.0, 1.0)
    for x in range(5):
        for y in range(5):
            for z in range(5):
                g.set(Coord(x, y, z), float(x + y + z))
    return g


def test_clip_keeps_only_inside_voxels():
    g = make_5x5x5()
    bbox = CoordBBox(Coord(1, 1, 1), Coord(3, 3, 3))
    clipped = clip_to_bbox(g, bbox)
    assert all(bbox.contains(c) for c, _ in clipped.iter_active())
    assert clipped.active_voxel_count() == 27


def test_clip_outside_bbox_returns_empty():
    g = make_5x5x5()
    bbox = CoordBBox(Coord(20, 20, 20), Coord(30, 30, 30))
    assert clip_to_bbox(g, bbox).active_voxel_count() == 0


def test_clip_preserves_values():
    g = make_5x5x5()
    bbox = CoordBBox(Coord(0, 0, 0), Coord(2, 2, 2))
    clipped = clip_to_bbox(g, bbox)
    for c, val in clipped.iter_active():
        assert val == float(c.x + c.y + c.z)


def test_clip_preserves_metadata():
    g = make_5x5x5()
    g.name = "density"
    g.grid_class = GridClass.FOG_VOLUME
    clipped = clip_to_bbox(g, CoordBBox(Coord(0, 0, 0), Coord(1, 1, 1)))
    assert clipped.name == "density"
    assert clipped.grid_class is GridClass.FOG_VOLUME
    assert clipped.transform == g.transform


def test_clip_empty_grid_returns_empty():
    g = Grid(0.0, 1.0)
    bbox = CoordBBox(Coord(0, 0, 0), Coord(10, 10, 10))
    assert clip_to_bbox(g, bbox).active_voxel_count() == 0


def test_crop_in_place_removes_outside():
    g = make_5x5x5()
    before = g.active_voxel_count()
    bbox = CoordBBox(Coord(0, 0, 0), Coord(2, 2, 2))
    crop_in_place(g, bbox)
    after = g.active_voxel_count()
    assert after < before
    assert after == 27
    assert all(bbox.contains(c) for c, _ in g.iter_active())


def test_crop_in_place_full_bbox_noop():
    g = make_5x5x5()
    before = g.active_voxel_count()
    crop_in_place(g, CoordBBox(Coord(0, 0, 0), Coord(4, 4, 4)))
    assert g.active_voxel_count() == before


def test_crop_in_place_empty_grid_noop():
    g = Grid(0.0, 1.0)
    crop_in_place(g, CoordBBox(Coord(0, 0, 0), Coord(10, 10, 10)))
    assert g.active_voxel_count() == 0