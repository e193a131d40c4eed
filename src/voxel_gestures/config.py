from __future__ import annotations

import logging
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, field_validator

from .colors import DEFAULT_PALETTE, normalize_color

APP_NAME = "voxel-gestures"

logger = logging.getLogger(__name__)


class ClassifierConfig(BaseModel):
    pinch_threshold: float = Field(
        0.05, description="Max distance between thumb and index tips for a pinch (normalized coordinates)"
    )
    extended_threshold: float = Field(
        0.15, description="Distance from the wrist separating an extended fingertip from a curled one"
    )


class DebounceConfig(BaseModel):
    hold_time_ms: int = Field(200, description="Time a gesture must be held before it can trigger an action")
    cooldown_ms: int = Field(300, description="Minimum time between two actions")


class GridConfig(BaseModel):
    size: int = Field(16, description="Number of cells on each axis of the grid", gt=0)
    voxel_size: float = Field(1.0, description="World size of one voxel", gt=0)
    plane_height: float = Field(0.0, description="World height of the plane the cursor is projected on")


class CameraConfig(BaseModel):
    position: tuple[float, float, float] = Field((12.0, 12.0, 12.0), description="Camera position in world space")
    target: tuple[float, float, float] = Field((0.0, 0.0, 0.0), description="Point the camera looks at")
    up: tuple[float, float, float] = Field((0.0, 1.0, 0.0), description="Up vector of the camera")
    fov: float = Field(50.0, description="Vertical field of view (degrees)", gt=0, lt=180)
    aspect: float = Field(16 / 9, description="Viewport width divided by height", gt=0)


class ColorsConfig(BaseModel):
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), description="Preset colors")
    default_index: int = Field(0, description="Index in the palette of the color selected at startup", ge=0)

    @field_validator("palette")
    @classmethod
    def check_palette(cls, palette: list[str]) -> list[str]:
        if not palette:
            raise ValueError("The palette needs at least one color")
        return [normalize_color(color) for color in palette]


class StorageConfig(BaseModel):
    save_path: Path | None = Field(None, description="File used by save/load. Default: user data directory")

    def get_save_path(self) -> Path:
        if self.save_path is not None:
            return self.save_path
        return Path(platformdirs.user_data_dir(APP_NAME)) / "voxel-world.json"


class Config(BaseModel):
    classifier: ClassifierConfig = Field(
        default_factory=lambda: ClassifierConfig(), description="Gesture classification thresholds"
    )
    debounce: DebounceConfig = Field(default_factory=lambda: DebounceConfig(), description="Hold and cooldown timings")
    grid: GridConfig = Field(default_factory=lambda: GridConfig(), description="Voxel grid configuration")
    camera: CameraConfig = Field(default_factory=lambda: CameraConfig(), description="Default camera")
    colors: ColorsConfig = Field(default_factory=lambda: ColorsConfig(), description="Color palette")
    storage: StorageConfig = Field(default_factory=lambda: StorageConfig(), description="Persistence settings")

    @classmethod
    def get_user_path(cls) -> Path:
        config_dir = Path(platformdirs.user_config_dir(APP_NAME))
        return config_dir / "config.json"

    @classmethod
    def validate_path(cls, path: Path | str | None) -> Path:
        if path is None:
            path = cls.get_user_path()
        elif isinstance(path, str):
            path = Path(path)

        return path.resolve()

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        path = cls.validate_path(path)

        if not path.exists():
            # If the config file does not exist, return a default config
            logger.info("Config file %s does not exist. Using default config.", path)
            return cls()

        if not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        try:
            return cls.model_validate_json(path.read_text())
        except ValueError as exc:
            logger.error("Error loading config from %s: %s", path, exc)
            logger.error("Using default config.")
            return cls()

    def save(self, path: Path | str | None = None) -> Path:
        path = self.validate_path(path)

        if path.exists() and not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path
