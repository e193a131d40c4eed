from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import IntEnum
from math import sqrt
from typing import Any, ClassVar, NamedTuple, TypeAlias


class HandLandmark(IntEnum):
    """MediaPipe hand landmark indices."""

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NB_LANDMARKS = len(HandLandmark)

LandmarkGroup: TypeAlias = list[HandLandmark]


class LandmarkGroups:
    FINGER_TIPS: ClassVar[LandmarkGroup] = [
        HandLandmark.THUMB_TIP,
        HandLandmark.INDEX_FINGER_TIP,
        HandLandmark.MIDDLE_FINGER_TIP,
        HandLandmark.RING_FINGER_TIP,
        HandLandmark.PINKY_TIP,
    ]
    # Fist and point checks ignore the thumb
    FINGER_TIPS_EXCEPT_THUMB: ClassVar[LandmarkGroup] = FINGER_TIPS[1:]
    CURLED_FOR_POINT: ClassVar[LandmarkGroup] = FINGER_TIPS[2:]


class Landmark(NamedTuple):
    """A landmark in MediaPipe normalized coordinates.

    Attributes:
        x: X coordinate (0 to 1, left to right of the image)
        y: Y coordinate (0 to 1, top to bottom of the image)
        z: Depth relative to the wrist (smaller is closer to the camera)
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_any(cls, point: Any) -> Landmark:
        """Create a Landmark from a 3-sequence or an object with `x`, `y` and `z` attributes."""
        if hasattr(point, "x") and hasattr(point, "y"):
            return cls(float(point.x), float(point.y), float(getattr(point, "z", 0.0) or 0.0))
        x, y, z = point
        return cls(float(x), float(y), float(z))

    def distance_to(self, other: Landmark) -> float:
        """Euclidean distance in 3D, without axis weighting."""
        return sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def to_dict(self) -> dict[str, Any]:
        """Export landmark data as a dictionary."""
        return {"x": self.x, "y": self.y, "z": self.z}


class HandSample:
    """The 21 landmarks of one detected hand for one frame.

    A sample is either complete or does not exist: partial samples are rejected.
    """

    __slots__ = ("landmarks",)

    def __init__(self, landmarks: Sequence[Landmark]) -> None:
        if len(landmarks) != NB_LANDMARKS:
            raise ValueError(f"A hand sample needs exactly {NB_LANDMARKS} landmarks, got {len(landmarks)}")
        self.landmarks: tuple[Landmark, ...] = tuple(landmarks)

    @classmethod
    def from_points(cls, points: Iterable[Any]) -> HandSample:
        """Build a sample from raw points (tuples, lists or MediaPipe `NormalizedLandmark` objects)."""
        return cls([Landmark.from_any(point) for point in points])

    def __getitem__(self, index: HandLandmark | int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    def __repr__(self) -> str:
        return f"HandSample(wrist={self.wrist}, index_tip={self.index_tip})"

    @property
    def wrist(self) -> Landmark:
        return self.landmarks[HandLandmark.WRIST]

    @property
    def thumb_tip(self) -> Landmark:
        return self.landmarks[HandLandmark.THUMB_TIP]

    @property
    def index_tip(self) -> Landmark:
        return self.landmarks[HandLandmark.INDEX_FINGER_TIP]

    def distance(self, first: HandLandmark, second: HandLandmark) -> float:
        """Distance between two landmarks of this sample."""
        return self.landmarks[first].distance_to(self.landmarks[second])

    def to_list(self) -> list[list[float]]:
        """Export the landmarks as `[[x, y, z], ...]`, the format used by recordings."""
        return [[landmark.x, landmark.y, landmark.z] for landmark in self.landmarks]
