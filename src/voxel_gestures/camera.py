"""Camera rays.

The renderer owns the real camera. The engine only needs to build a ray going through a
point of the screen, expressed in normalized device coordinates ([-1, 1] on both axes,
y up), which is what `RayCaster` describes.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import radians, tan
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

if TYPE_CHECKING:
    from .config import CameraConfig

Vector = np.ndarray[Any, np.dtype[np.float64]]

EPSILON = 1e-10


def _normalize(vector: Vector) -> Vector:
    norm = float(np.linalg.norm(vector))
    if norm < EPSILON:
        raise ValueError("Cannot normalize a zero-length vector")
    return vector / norm


@dataclass(frozen=True)
class Ray:
    origin: Vector
    direction: Vector  # Unit vector

    @classmethod
    def from_points(cls, origin: Any, direction: Any) -> Ray:
        return cls(np.asarray(origin, dtype=np.float64), _normalize(np.asarray(direction, dtype=np.float64)))

    def at(self, distance: float) -> Vector:
        return self.origin + self.direction * distance

    def intersect_horizontal_plane(self, height: float = 0.0) -> Vector | None:
        """Intersect the ray with the plane `y = height`.

        Returns `None` when the ray is parallel to the plane or when the plane is behind
        the origin of the ray.
        """
        denominator = float(self.direction[1])
        if abs(denominator) < EPSILON:
            return None

        distance = (height - float(self.origin[1])) / denominator
        if distance < 0:
            return None
        return self.at(distance)


class RayCaster(Protocol):
    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Ray: ...


class PerspectiveCamera:
    """A pinhole camera looking at `target`, with a vertical field of view in degrees."""

    def __init__(
        self,
        position: tuple[float, float, float] = (12.0, 12.0, 12.0),
        target: tuple[float, float, float] = (0.0, 0.0, 0.0),
        up: tuple[float, float, float] = (0.0, 1.0, 0.0),
        fov: float = 50.0,
        aspect: float = 16 / 9,
    ) -> None:
        self.position: Vector = np.asarray(position, dtype=np.float64)
        self.target: Vector = np.asarray(target, dtype=np.float64)
        self.fov = fov
        self.aspect = aspect

        self.forward: Vector = _normalize(self.target - self.position)
        self.right: Vector = _normalize(np.cross(self.forward, np.asarray(up, dtype=np.float64)))
        self.up: Vector = np.cross(self.right, self.forward)

    @classmethod
    def from_config(cls, config: CameraConfig) -> PerspectiveCamera:
        return cls(
            position=config.position,
            target=config.target,
            up=config.up,
            fov=config.fov,
            aspect=config.aspect,
        )

    def __repr__(self) -> str:
        return (
            f"PerspectiveCamera(position={self.position.tolist()}, target={self.target.tolist()}, "
            f"fov={self.fov}, aspect={self.aspect:.3f})"
        )

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Ray:
        half_height = tan(radians(self.fov) / 2)
        half_width = half_height * self.aspect
        direction = self.forward + self.right * (ndc_x * half_width) + self.up * (ndc_y * half_height)
        return Ray(self.position.copy(), _normalize(direction))
