import pytest

from sparsevox.mc_tables import EDGE_ENDPOINTS, edge_mask, triangle_edges

ALL_INDICES = range(256)


def test_first_configuration_pinned():
    assert edge_mask(1) == 0x109
    assert triangle_edges(1) == ((0, 8, 3),)


def test_empty_and_full_cells_have_no_surface():
    assert edge_mask(0) == 0
    assert edge_mask(255) == 0
    assert triangle_edges(0) == ()
    assert triangle_edges(255) == ()


@pytest.mark.parametrize("cube_index", ALL_INDICES)
def test_mask_marks_edges_whose_corners_differ(cube_index):
    mask = edge_mask(cube_index)
    for edge, (a, b) in enumerate(EDGE_ENDPOINTS):
        differs = ((cube_index >> a) & 1) != ((cube_index >> b) & 1)
        assert bool(mask & (1 << edge)) == differs


@pytest.mark.parametrize("cube_index", ALL_INDICES)
def test_triangles_use_exactly_the_masked_edges(cube_index):
    mask = edge_mask(cube_index)
    used = {edge for tri in triangle_edges(cube_index) for edge in tri}
    expected = {edge for edge in range(12) if mask & (1 << edge)}
    assert used == expected


@pytest.mark.parametrize("cube_index", ALL_INDICES)
def test_triangles_are_well_formed(cube_index):
    tris = triangle_edges(cube_index)
    assert len(tris) <= 5
    for tri in tris:
        assert len(set(tri)) == 3
        assert all(0 <= edge < 12 for edge in tri)


@pytest.mark.parametrize("cube_index", ALL_INDICES)
def test_complement_has_same_mask(cube_index):
    assert edge_mask(cube_index) == edge_mask(255 - cube_index)


@pytest.mark.parametrize("bad", [-1, 256, 1000])
def test_out_of_range_index_rejected(bad):
    with pytest.raises(ValueError):
        edge_mask(bad)
    with pytest.raises(ValueError):
        triangle_edges(bad)