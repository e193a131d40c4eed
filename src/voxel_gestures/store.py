from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from .clock import Clock, MonotonicClock
from .colors import normalize_color
from .geometry import GridCell, VoxelKey, grid_key, in_bounds, parse_key
from .models.voxels import Voxel, VoxelRecord

DEFAULT_GRID_SIZE = 16

logger = logging.getLogger(__name__)


class VoxelStore:
    """The sparse, bounded voxel grid.

    Voxels are kept in a dict keyed by `grid_key`. All mutations go through the methods
    below, under a re-entrant lock, so a bulk replace (import/load) is never seen half done.
    """

    def __init__(self, grid_size: int = DEFAULT_GRID_SIZE, clock: Clock | None = None) -> None:
        if grid_size <= 0:
            raise ValueError(f"Grid size must be positive, got {grid_size}")
        self._grid_size = grid_size
        self.clock: Clock = clock or MonotonicClock()
        self._voxels: dict[VoxelKey, Voxel] = {}
        self.lock = threading.RLock()

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def count(self) -> int:
        return len(self._voxels)

    @property
    def is_empty(self) -> bool:
        return not self._voxels

    def __len__(self) -> int:
        return len(self._voxels)

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, tuple) or len(cell) != 3:
            return False
        return grid_key(*cell) in self._voxels

    def __iter__(self) -> Iterator[tuple[GridCell, Voxel]]:
        """Iterate over `(cell, voxel)` pairs, sorted by cell."""
        with self.lock:
            items = sorted((parse_key(key), voxel) for key, voxel in self._voxels.items())
        return iter(items)

    def __repr__(self) -> str:
        return f"VoxelStore(grid_size={self._grid_size}, count={self.count})"

    def add_voxel(self, x: int, y: int, z: int, color: str) -> bool:
        """Place (or repaint) a voxel. Returns False, without any change, if out of the grid."""
        color = normalize_color(color)
        with self.lock:
            timestamp = self.clock.now()
            if not in_bounds(x, y, z, self._grid_size):
                return False
            self._voxels[grid_key(x, y, z)] = Voxel(color=color, timestamp=timestamp)
        return True

    def remove_voxel(self, x: int, y: int, z: int) -> bool:
        """Remove the voxel at this cell, if any. Always returns True."""
        with self.lock:
            self._voxels.pop(grid_key(x, y, z), None)
        return True

    def get_voxel_at(self, x: int, y: int, z: int) -> Voxel | None:
        return self._voxels.get(grid_key(x, y, z))

    def clear_all(self) -> None:
        with self.lock:
            self._voxels.clear()

    def export_voxels(self) -> list[VoxelRecord]:
        """Export all voxels, sorted by coordinates."""
        return [
            VoxelRecord(x=cell.x, y=cell.y, z=cell.z, color=voxel.color, timestamp=voxel.timestamp)
            for cell, voxel in self
        ]

    def import_voxels(self, records: Iterable[VoxelRecord]) -> int:
        """Replace the whole content of the store by the given records.

        Records without timestamp are stamped with the current time. Records out of the grid
        are dropped. Returns the number of voxels in the store after the import.
        """
        records = list(records)
        with self.lock:
            now = self.clock.now()
            grid_size = self._grid_size
            voxels: dict[VoxelKey, Voxel] = {}
            dropped = 0
            for record in records:
                if not in_bounds(record.x, record.y, record.z, grid_size):
                    dropped += 1
                    continue
                timestamp = record.timestamp if record.timestamp is not None else now
                voxels[grid_key(record.x, record.y, record.z)] = Voxel(color=record.color, timestamp=timestamp)
            self._voxels = voxels

        if dropped:
            logger.warning("Dropped %d out of bounds voxel(s) at import (grid size: %d)", dropped, grid_size)
        return len(voxels)

    def resize(self, grid_size: int) -> int:
        """Change the grid size, dropping the voxels now out of the grid. Returns the number dropped."""
        if grid_size <= 0:
            raise ValueError(f"Grid size must be positive, got {grid_size}")
        with self.lock:
            self._grid_size = grid_size
            kept = {key: voxel for key, voxel in self._voxels.items() if in_bounds(*parse_key(key), grid_size)}
            dropped = len(self._voxels) - len(kept)
            self._voxels = kept
        if dropped:
            logger.info("Resized grid to %d, %d voxel(s) dropped", grid_size, dropped)
        return dropped
