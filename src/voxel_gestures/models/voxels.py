from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..colors import normalize_color
from ..geometry import GridCell


@dataclass(frozen=True)
class Voxel:
    """Content of an occupied cell."""

    color: str  # "#RRGGBB"
    timestamp: int  # Creation time, in ms, from the engine clock

    def to_dict(self) -> dict[str, Any]:
        return {"color": self.color, "timestamp": self.timestamp}


class VoxelRecord(BaseModel):
    """A voxel with its coordinates, as exported and persisted."""

    x: int = Field(description="Grid X coordinate")
    y: int = Field(description="Grid Y coordinate")
    z: int = Field(description="Grid Z coordinate")
    color: str = Field(description="Color as '#RRGGBB'")
    timestamp: int | None = Field(None, description="Creation time in ms. Stamped at import if missing")

    @field_validator("color")
    @classmethod
    def check_color(cls, color: str) -> str:
        return normalize_color(color)

    @property
    def cell(self) -> GridCell:
        return GridCell(self.x, self.y, self.z)
