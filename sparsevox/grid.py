"""Sparse voxel grid: integer coordinates, transforms, leaf nodes and the grid."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Sequence

LEAF_LOG2DIM = 3
LEAF_DIM = 1 << LEAF_LOG2DIM
LEAF_SIZE = LEAF_DIM**3
_LEAF_MASK = LEAF_DIM - 1


class Coord(NamedTuple):
    """Integer voxel coordinate in index space."""

    x: int
    y: int
    z: int

    def __add__(self, other: "Coord") -> "Coord":  # type: ignore[override]
        return Coord(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Coord") -> "Coord":
        return Coord(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass(frozen=True)
class CoordBBox:
    """Inclusive axis-aligned box of voxel coordinates."""

    min: Coord
    max: Coord

    def contains(self, coord: Coord) -> bool:
        return (
            self.min.x <= coord.x <= self.max.x
            and self.min.y <= coord.y <= self.max.y
            and self.min.z <= coord.z <= self.max.z
        )


class GridClass(Enum):
    UNKNOWN = "unknown"
    LEVEL_SET = "level_set"
    FOG_VOLUME = "fog_volume"
    STAGGERED = "staggered"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class Transform:
    """Uniform-scale, translated mapping between index and world space."""

    voxel_size: float = 1.0
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if not self.voxel_size > 0.0:
            raise ValueError(f"voxel size must be positive, got {self.voxel_size}")

    @classmethod
    def uniform(cls, voxel_size: float) -> "Transform":
        return cls(float(voxel_size))

    def world_to_index_f64(self, world: Sequence[float]) -> tuple[float, float, float]:
        """Continuous index-space position of a world point."""
        inv = 1.0 / self.voxel_size
        return (
            (world[0] - self.origin[0]) * inv,
            (world[1] - self.origin[1]) * inv,
            (world[2] - self.origin[2]) * inv,
        )

    def world_to_index(self, world: Sequence[float]) -> Coord:
        """Nearest voxel to a world point (halves round away from zero)."""
        ix, iy, iz = self.world_to_index_f64(world)
        return Coord(_round_half_away(ix), _round_half_away(iy), _round_half_away(iz))

    def index_to_world(self, coord: Coord) -> tuple[float, float, float]:
        vs = self.voxel_size
        return (
            coord.x * vs + self.origin[0],
            coord.y * vs + self.origin[1],
            coord.z * vs + self.origin[2],
        )


def leaf_origin(coord: Coord) -> Coord:
    """Origin of the leaf that holds ``coord``."""
    return Coord(coord.x & ~_LEAF_MASK, coord.y & ~_LEAF_MASK, coord.z & ~_LEAF_MASK)


def leaf_offset(coord: Coord) -> int:
    """Linear offset of ``coord`` inside its leaf (x-major, z fastest)."""
    return (
        ((coord.x & _LEAF_MASK) << (2 * LEAF_LOG2DIM))
        | ((coord.y & _LEAF_MASK) << LEAF_LOG2DIM)
        | (coord.z & _LEAF_MASK)
    )


class LeafNode:
    """Dense 8x8x8 block of values with a per-voxel active flag."""

    __slots__ = ("origin", "values", "active")

    def __init__(self, origin: Coord, background: float) -> None:
        self.origin = origin
        self.values: list[float] = [background] * LEAF_SIZE
        self.active = bytearray(LEAF_SIZE)

    def coord_at(self, offset: int) -> Coord:
        return self.origin + Coord(
            offset >> (2 * LEAF_LOG2DIM),
            (offset >> LEAF_LOG2DIM) & _LEAF_MASK,
            offset & _LEAF_MASK,
        )

    def get(self, coord: Coord) -> float:
        return self.values[leaf_offset(coord)]

    def set(self, coord: Coord, value: float) -> None:
        offset = leaf_offset(coord)
        self.values[offset] = value
        self.active[offset] = 1

    def set_inactive(self, coord: Coord, value: float) -> None:
        offset = leaf_offset(coord)
        self.values[offset] = value
        self.active[offset] = 0

    def is_active(self, coord: Coord) -> bool:
        return bool(self.active[leaf_offset(coord)])

    def is_active_offset(self, offset: int) -> bool:
        return bool(self.active[offset])

    def iter_active(self) -> Iterator[tuple[Coord, float]]:
        for offset, flag in enumerate(self.active):
            if flag:
                yield self.coord_at(offset), self.values[offset]

    def active_count(self) -> int:
        return sum(self.active)


class Grid:
    """Sparse grid of float voxels organised in 8x8x8 leaves."""

    def __init__(self, background: float, voxel_size: float = 1.0) -> None:
        self.background = float(background)
        self.transform = Transform.uniform(voxel_size)
        self.name = ""
        self.grid_class = GridClass.UNKNOWN
        self._leaves: dict[Coord, LeafNode] = {}

    @classmethod
    def level_set(cls, voxel_size: float, half_width: float) -> "Grid":
        """Empty level-set grid whose background is the band half-width."""
        grid = cls(voxel_size * half_width, voxel_size)
        grid.grid_class = GridClass.LEVEL_SET
        return grid

    @classmethod
    def with_transform(cls, background: float, transform: Transform) -> "Grid":
        grid = cls(background, transform.voxel_size)
        grid.transform = transform
        return grid

    @property
    def voxel_size(self) -> float:
        return self.transform.voxel_size

    def get(self, coord: Coord) -> float:
        leaf = self._leaves.get(leaf_origin(coord))
        if leaf is None:
            return self.background
        return leaf.values[leaf_offset(coord)]

    def set(self, coord: Coord, value: float) -> None:
        origin = leaf_origin(coord)
        leaf = self._leaves.get(origin)
        if leaf is None:
            leaf = LeafNode(origin, self.background)
            self._leaves[origin] = leaf
        leaf.set(coord, value)

    def is_active(self, coord: Coord) -> bool:
        leaf = self._leaves.get(leaf_origin(coord))
        return leaf is not None and leaf.is_active(coord)

    def deactivate(self, coord: Coord) -> None:
        """Mark a voxel inactive and reset it to the background value."""
        leaf = self._leaves.get(leaf_origin(coord))
        if leaf is not None:
            leaf.set_inactive(coord, self.background)

    def iter_active(self) -> Iterator[tuple[Coord, float]]:
        for origin in self.leaf_origins():
            yield from self._leaves[origin].iter_active()

    def active_voxel_count(self) -> int:
        return sum(leaf.active_count() for leaf in self._leaves.values())

    def leaf_count(self) -> int:
        return len(self._leaves)

    def leaf_origins(self) -> list[Coord]:
        return sorted(self._leaves)

    def leaves(self) -> Iterator[LeafNode]:
        for origin in self.leaf_origins():
            yield self._leaves[origin]

    def leaf(self, coord: Coord) -> LeafNode | None:
        return self._leaves.get(leaf_origin(coord))

    def remove_empty_leaves(self) -> None:
        self._leaves = {
            origin: leaf for origin, leaf in self._leaves.items() if leaf.active_count()
        }