"""Versioned save format of a voxel world.

    {
      "version": "1.0",
      "gridSize": 16,
      "voxels": [{"x": 3, "y": 0, "z": 5, "color": "#FF0000", "timestamp": 1234}, ...],
      "timestamp": 5678
    }

A payload is validated entirely before touching the store: a bad payload never leaves a
partially imported world behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models.voxels import VoxelRecord
from .store import VoxelStore

FORMAT_VERSION = "1.0"

logger = logging.getLogger(__name__)


class LoadError(ValueError):
    """The payload is not a valid save of a supported version."""


class SaveData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(description="Format version")
    grid_size: int = Field(alias="gridSize", description="Grid size of the saved world", gt=0)
    voxels: list[VoxelRecord] = Field(description="All the voxels of the world")
    timestamp: int = Field(description="Time of the save, in ms")


class LoadResult(NamedTuple):
    """Outcome of a load. An empty world loads successfully, with `count == 0`."""

    ok: bool
    count: int = 0
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


def build_save_data(store: VoxelStore) -> SaveData:
    with store.lock:
        return SaveData(
            version=FORMAT_VERSION,
            grid_size=store.grid_size,
            voxels=store.export_voxels(),
            timestamp=store.clock.now(),
        )


def dumps(store: VoxelStore, indent: int | None = None) -> str:
    """Serialize the store to a JSON document."""
    return build_save_data(store).model_dump_json(by_alias=True, indent=indent)


def parse_save_data(payload: str | bytes) -> SaveData:
    """Parse and validate a JSON document.

    Raises:
        LoadError: If the JSON is invalid, a field is missing or wrong, or the version is not supported.
    """
    try:
        data = SaveData.model_validate_json(payload)
    except ValidationError as exc:
        raise LoadError(f"Invalid voxel world: {exc}") from exc
    if data.version != FORMAT_VERSION:
        raise LoadError(f"Unsupported voxel world version {data.version!r} (expected {FORMAT_VERSION!r})")
    return data


def loads(store: VoxelStore, payload: str | bytes) -> LoadResult:
    """Replace the content of the store by the world in `payload`. The store is untouched on failure."""
    try:
        data = parse_save_data(payload)
    except LoadError as exc:
        logger.error("Failed to load voxel world: %s", exc)
        return LoadResult(ok=False, error=str(exc))

    if data.grid_size != store.grid_size:
        logger.info("Loading a world saved with grid size %d into a grid of size %d", data.grid_size, store.grid_size)

    with store.lock:
        count = store.import_voxels(data.voxels)
    return LoadResult(ok=True, count=count)


def export_file_name(timestamp: int) -> str:
    return f"voxel-world-{timestamp}.json"


def save_to_file(store: VoxelStore, path: Path | str) -> Path:
    """Write the world to `path`. If `path` is a directory, a timestamped file is created in it."""
    path = Path(path)
    if path.is_dir():
        path = path / export_file_name(store.clock.now())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(store, indent=2))
    logger.info("Saved %d voxel(s) to %s", store.count, path)
    return path


def load_from_file(store: VoxelStore, path: Path | str) -> LoadResult:
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read voxel world from %s: %s", path, exc)
        return LoadResult(ok=False, error=str(exc))
    result = loads(store, payload)
    if result:
        logger.info("Loaded %d voxel(s) from %s", result.count, path)
    return result
