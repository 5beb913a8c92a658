# sparsevox

Sparse voxel grids with tools for signed-distance-field (level-set) work:
trilinear sampling, sphere generation, clipping, gradients and curvature,
merging, sign flood-fill, CSG, smoothing filters, morphology, marching-cubes
meshing, mesh-to-volume conversion, narrow-band maintenance and ray casting.

Grids store float values in 8×8×8 leaf blocks keyed by integer voxel
coordinates. Any voxel that has not been set reads back as the grid's
`background` value. Each grid carries a `Transform` (uniform voxel size plus a
world-space origin), a `name` and a `grid_class` (`GridClass.LEVEL_SET`,
`GridClass.FOG_VOLUME`, ...).

## Install

```
pip install .
```

The package has no runtime dependencies beyond the standard library.

## Example

```python
from sparsevox.grid import Coord, CoordBBox, Grid
from sparsevox.sphere import make_level_set_sphere
from sparsevox.interpolation import sample_trilinear
from sparsevox.csg import csg_union
from sparsevox.volume_to_mesh import volume_to_mesh
from sparsevox.ray_intersect import ray_intersect
from sparsevox.clip import clip_to_bbox

# Radius 5, centred at the origin, 0.5-unit voxels, 3-voxel narrow band.
a = make_level_set_sphere(5.0, (0.0, 0.0, 0.0), 0.5, 3.0)
b = make_level_set_sphere(5.0, (4.0, 0.0, 0.0), 0.5, 3.0)

both = csg_union(a, b)
print(both.active_voxel_count())

print(sample_trilinear(a, (5.0, 0.0, 0.0)))   # close to 0 on the surface

mesh = volume_to_mesh(a, 0.0)
print(mesh.tri_count(), mesh.is_watertight())

hit = ray_intersect(a, (20.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
if hit is not None:
    print(hit.t, hit.position, hit.normal)

corner = clip_to_bbox(a, CoordBBox(Coord(0, 0, 0), Coord(20, 20, 20)))

g = Grid(0.0, 1.0)
g.set(Coord(1, 2, 3), 4.5)
print(g.get(Coord(1, 2, 3)), g.get(Coord(9, 9, 9)))   # 4.5 0.0
```

## Modules

- `sparsevox.grid` – `Coord`, `CoordBBox`, `GridClass`, `Transform`,
  `LeafNode`, `Grid`, and the helpers `leaf_origin` / `leaf_offset`.
  `Grid` offers `get`, `set`, `is_active`, `deactivate`, `iter_active`
  (sorted by leaf), `active_voxel_count`, `leaf_count`, `leaf_origins`,
  `leaves`, `leaf`, `remove_empty_leaves`, and the constructors
  `Grid.level_set(voxel_size, half_width)` and
  `Grid.with_transform(background, transform)`.
- `sparsevox.interpolation` – `sample_trilinear(grid, world_pos)`.
- `sparsevox.sphere` – `make_level_set_sphere(radius, center, voxel_size, half_width)`.
- `sparsevox.clip` – `clip_to_bbox` (new grid) and `crop_in_place`.
- `sparsevox.gradient` – `gradient_at`, `gradient_field`, `laplacian_at`,
  `mean_curvature_at`; all in index space (divide by the voxel size for
  world-space values).
- `sparsevox.merge` – `merge_copy`, `merge_union` (first grid wins at
  overlaps), `merge_intersection` (values from the first grid).
- `sparsevox.flood_fill` – `flood_fill_sign`, a leaf-local sign fill of
  inactive voxels to `±background`.
- `sparsevox.csg` – `csg_union`, `csg_intersection`, `csg_difference` as
  pointwise min/max of signed distances.
- `sparsevox.mc_tables` – marching-cubes lookups `edge_mask(cube_index)` and
  `triangle_edges(cube_index)`; an index outside 0..255 raises `ValueError`.
- `sparsevox.volume_to_mesh` – `Mesh` (`vertices`, `triangles`, `tri_count`,
  `vertex_count`, `is_watertight`) and `volume_to_mesh(grid, isovalue=0.0)`.
  Vertex positions are index coordinates scaled by the voxel size.
- `sparsevox.filter` – `mean_filter` and `median_filter` over the voxel and
  its six face neighbours.
- `sparsevox.mesh_to_volume` – `TriMesh` and
  `mesh_to_level_set(mesh, voxel_size, half_width)`, a brute-force signed
  distance with angle-weighted pseudo-normal sign.
- `sparsevox.morphology` – `dilate`, `erode`, `opening`, `closing`
  (six-connected).
- `sparsevox.level_set_track` – `find_zero_crossings`, `trim_narrow_band`,
  `rebuild_narrow_band`, `extend_velocity`.
- `sparsevox.ray_intersect` – `RayHit` and
  `ray_intersect(grid, origin, direction)`, returning `None` on a miss or a
  zero direction.

Filters, morphology, flood fill, cropping and narrow-band tools modify the
grid in place and return `None`; sampling, CSG, clipping, merging and meshing
return new objects.

## What it does not do

- There is no file format: grids and meshes cannot be saved to or loaded
  from disk.
- There is no command-line tool; the package is used as a library.
- All work runs in pure Python on a single thread, so large grids or meshes
  with many triangles (mesh-to-volume is O(voxels × triangles)) are slow.

## Tests

```
pip install .[test]
pytest
```