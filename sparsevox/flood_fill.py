"""Sign flood-fill for level-set grids.

Inactive voxels of each leaf are given ``-background`` (inside) or
``+background`` (outside), judged from the active voxels of the same leaf.
"""

from __future__ import annotations

from sparsevox.grid import LEAF_DIM, LEAF_LOG2DIM, Grid

_MASK = LEAF_DIM - 1
_DELTAS = ((-1, 0, 0), (1, 0, 0), (0, -1, 0), (0, 1, 0), (0, 0, -1), (0, 0, 1))


def _local(offset: int) -> tuple[int, int, int]:
    return (
        offset >> (2 * LEAF_LOG2DIM),
        (offset >> LEAF_LOG2DIM) & _MASK,
        offset & _MASK,
    )


def _offset(lx: int, ly: int, lz: int) -> int:
    return (lx << (2 * LEAF_LOG2DIM)) | (ly << LEAF_LOG2DIM) | lz


def flood_fill_sign(grid: Grid) -> None:
    """Set inactive voxels to ``+/-background`` by the sign of nearby active ones.

    Each inactive voxel takes the majority sign of its active face neighbours
    within the same leaf (ties count as outside); with no such neighbours it
    takes the majority sign of the leaf's active voxels. Leaves without active
    voxels are left alone.
    """
    bg = grid.background

    for leaf in grid.leaves():
        mask = bytes(leaf.active)
        values = list(leaf.values)

        active_values = [v for v, flag in zip(values, mask) if flag]
        if not active_values:
            continue
        neg_count = sum(1 for v in active_values if v < 0.0)
        pos_count = len(active_values) - neg_count
        global_fill = -bg if neg_count > pos_count else bg

        for offset, flag in enumerate(mask):
            if flag:
                continue
            lx, ly, lz = _local(offset)
            local_neg = local_pos = 0
            for dx, dy, dz in _DELTAS:
                nx, ny, nz = lx + dx, ly + dy, lz + dz
                if not (0 <= nx < LEAF_DIM and 0 <= ny < LEAF_DIM and 0 <= nz < LEAF_DIM):
                    continue
                n_off = _offset(nx, ny, nz)
                if mask[n_off]:
                    if values[n_off] < 0.0:
                        local_neg += 1
                    else:
                        local_pos += 1

            if local_neg + local_pos:
                leaf.values[offset] = -bg if local_neg > local_pos else bg
            else:
                leaf.values[offset] = global_fill