import math

import pytest

from sparsevox.filter import mean_filter, median_filter
from sparsevox.grid import Coord, Grid
from sparsevox.sphere import make_level_set_sphere

NEIGHBORS = [
    Coord(1, 0, 0),
    Coord(-1, 0, 0),
    Coord(0, 1, 0),
    Coord(0, -1, 0),
    Coord(0, 0, 1),
    Coord(0, 0, -1),
]
U64 = (1 << 64) - 1


def _rms(grid, reference, coords):
    total = sum((grid.get(c) - reference.get(c)) ** 2 for c in coords)
    return math.sqrt(total / len(coords))


def test_mean_filter_reduces_noise_on_sphere():
    grid = make_level_set_sphere(10.0, (0.0, 0.0, 0.0), 0.5, 5.0)
    active = list(grid.iter_active())
    interior = [c for c, _ in active if all(grid.is_active(c + off) for off in NEIGHBORS)]
    assert len(interior) > 100

    seed = 12345
    for coord, value in active:
        seed = (seed * 6364136223846793005 + 1) & U64
        noise = ((seed >> 33) / float(0xFFFFFFFF >> 1) - 1.0) * 0.3
        grid.set(coord, value + noise)

    original = make_level_set_sphere(10.0, (0.0, 0.0, 0.0), 0.5, 5.0)
    before = _rms(grid, original, interior)
    mean_filter(grid, 2)
    after = _rms(grid, original, interior)
    assert after < before


def test_median_filter_preserves_sphere_shape():
    grid = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 0.5, 3.0)
    original = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 0.5, 3.0)
    active = list(grid.iter_active())
    for i, (coord, _) in enumerate(active):
        if i % 17 == 0:
            grid.set(coord, 100.0)

    median_filter(grid, 1)

    rms = _rms(grid, original, [c for c, _ in active])
    assert rms < 5.0


def test_mean_filter_on_constant_field_is_noop():
    grid = Grid(42.0, 1.0)
    for x in range(7):
        for y in range(7):
            for z in range(7):
                grid.set(Coord(x, y, z), 42.0)

    mean_filter(grid, 3)

    assert grid.get(Coord(3, 3, 3)) == pytest.approx(42.0, abs=1e-5)
    assert grid.get(Coord(0, 0, 0)) == pytest.approx(42.0, abs=1e-5)


def test_mean_filter_single_voxel_averages_with_background():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(2, 2, 2), 7.0)
    mean_filter(grid, 1)
    assert grid.get(Coord(2, 2, 2)) == pytest.approx(1.0)
    assert grid.active_voxel_count() == 1


def test_median_filter_isolated_outlier_goes_to_background():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(0, 0, 0), 10.0)
    median_filter(grid, 1)
    assert grid.get(Coord(0, 0, 0)) == 0.0


def test_zero_iterations_leaves_grid_unchanged():
    grid = Grid(0.0, 1.0)
    grid.set(Coord(1, 1, 1), 5.0)
    mean_filter(grid, 0)
    median_filter(grid, 0)
    assert grid.get(Coord(1, 1, 1)) == 5.0
    assert grid.active_voxel_count() == 1