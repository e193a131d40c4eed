"""Pure coordinate math for the voxel grid."""

from __future__ import annotations

from math import floor
from typing import NamedTuple, TypeAlias

VoxelKey: TypeAlias = str

KEY_SEPARATOR = ","


class GridCell(NamedTuple):
    """Integer address of a voxel in the grid."""

    x: int
    y: int
    z: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


def grid_key(x: int, y: int, z: int) -> VoxelKey:
    """Encode an integer triple as a hashable key (`"x,y,z"`)."""
    return f"{int(x)}{KEY_SEPARATOR}{int(y)}{KEY_SEPARATOR}{int(z)}"


def parse_key(key: VoxelKey) -> GridCell:
    """Decode a key created by `grid_key`.

    Raises:
        ValueError: If the key is not made of three comma separated integers.
    """
    parts = key.split(KEY_SEPARATOR)
    if len(parts) != 3:
        raise ValueError(f"Invalid voxel key {key!r}: expected 3 coordinates, got {len(parts)}")
    try:
        x, y, z = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Invalid voxel key {key!r}: coordinates must be integers") from exc
    return GridCell(x, y, z)


def in_bounds(x: int, y: int, z: int, grid_size: int) -> bool:
    """Check that all three coordinates are in `[0, grid_size)`."""
    return 0 <= x < grid_size and 0 <= y < grid_size and 0 <= z < grid_size


def clamp_to_grid(value: int, grid_size: int) -> int:
    """Clamp `value` into `[0, grid_size - 1]`."""
    return max(0, min(grid_size - 1, int(value)))


def world_to_grid(x: float, y: float, z: float, voxel_size: float = 1.0) -> GridCell:
    """Convert a world position to the cell containing it."""
    return GridCell(floor(x / voxel_size), floor(y / voxel_size), floor(z / voxel_size))


def grid_to_world(x: int, y: int, z: int, voxel_size: float = 1.0) -> tuple[float, float, float]:
    """Convert a cell to the world position of its center."""
    half = voxel_size / 2
    return x * voxel_size + half, y * voxel_size + half, z * voxel_size + half
