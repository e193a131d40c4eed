from __future__ import annotations

from math import floor
from typing import TYPE_CHECKING

from .geometry import GridCell, clamp_to_grid

if TYPE_CHECKING:
    from .camera import RayCaster
    from .config import GridConfig
    from .models.landmarks import Landmark


def to_ndc(x: float, y: float) -> tuple[float, float]:
    """Convert normalized image coordinates (y down) to NDC (y up)."""
    return 2 * x - 1, -(2 * y - 1)


class SpatialMapper:
    """Project a screen position onto the grid floor and snap it to a cell.

    The grid is centered on the world origin: world `x`/`z` are divided by the voxel size,
    then shifted by half the grid size before being floored. Rays hitting the plane outside
    the grid are clamped to the nearest border cell. The engine works on a single layer: the cell is always at `y = 0`.
    """

    def __init__(self, grid_size: int, plane_height: float = 0.0, voxel_size: float = 1.0) -> None:
        if voxel_size <= 0:
            raise ValueError(f"Voxel size must be positive, got {voxel_size}")
        self.grid_size = grid_size
        self.plane_height = plane_height
        self.voxel_size = voxel_size

    @classmethod
    def from_config(cls, config: GridConfig) -> SpatialMapper:
        return cls(grid_size=config.size, plane_height=config.plane_height, voxel_size=config.voxel_size)

    def snap(self, world_x: float, world_z: float) -> GridCell:
        half = self.grid_size / 2
        return GridCell(
            clamp_to_grid(floor(world_x / self.voxel_size + half), self.grid_size),
            0,
            clamp_to_grid(floor(world_z / self.voxel_size + half), self.grid_size),
        )

    def map(self, position: Landmark | tuple[float, float] | None, camera: RayCaster) -> GridCell | None:
        """Return the targeted cell, or `None` if there is no position or the ray misses the plane."""
        if position is None:
            return None

        ray = camera.ray_from_ndc(*to_ndc(position[0], position[1]))
        hit = ray.intersect_horizontal_plane(self.plane_height)
        if hit is None:
            return None

        return self.snap(float(hit[0]), float(hit[2]))
