from sparsevox.grid import Coord, Grid
from sparsevox.morphology import closing, dilate, erode, opening

NEIGHBORS = [
    Coord(1, 0, 0),
    Coord(-1, 0, 0),
    Coord(0, 1, 0),
    Coord(0, -1, 0),
    Coord(0, 0, 1),
    Coord(0, 0, -1),
]


def filled_cube(lo, hi, skip=()):
    grid = Grid(0.0, 1.0)
    for x in range(lo, hi + 1):
        for y in range(lo, hi + 1):
            for z in range(lo, hi + 1):
                if (x, y, z) not in skip:
                    grid.set(Coord(x, y, z), 1.0)
    return grid


def test_dilate_single_voxel_produces_7_active():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(0, 0, 0), 1.0)
    assert grid.active_voxel_count() == 1

    dilate(grid, 1)

    assert grid.active_voxel_count() == 7
    for offset in NEIGHBORS:
        c = Coord(0, 0, 0) + offset
        assert grid.is_active(c)
        assert grid.get(c) == 1.0


def test_erode_3x3x3_solid_leaves_center():
    grid = filled_cube(-1, 1)
    assert grid.active_voxel_count() == 27

    erode(grid, 1)

    assert grid.active_voxel_count() == 1
    assert grid.is_active(Coord(0, 0, 0))


def test_erode_resets_to_background():
    grid = Grid(-2.0, 1.0)
    grid.set(Coord(3, 3, 3), 5.0)
    erode(grid, 1)
    assert not grid.is_active(Coord(3, 3, 3))
    assert grid.get(Coord(3, 3, 3)) == -2.0


def test_dilate_two_iterations():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(0, 0, 0), 1.0)

    dilate(grid, 2)

    assert grid.active_voxel_count() == 25


def test_dilate_zero_iterations_is_noop():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(0, 0, 0), 1.0)
    dilate(grid, 0)
    assert grid.active_voxel_count() == 1


def test_opening_preserves_large_feature():
    grid = filled_cube(-2, 2)

    opening(grid, 1)
    after = grid.active_voxel_count()

    assert after > 0
    assert after >= 27


def test_closing_fills_small_hole():
    grid = filled_cube(-2, 2, skip={(0, 0, 0)})
    assert not grid.is_active(Coord(0, 0, 0))

    closing(grid, 1)

    assert grid.is_active(Coord(0, 0, 0))