from __future__ import annotations

from enum import Enum


class Gestures(str, Enum):
    NONE = "none"  # A hand is visible but no rule matched
    PINCH = "pinch"  # Thumb and index tips touching
    POINT = "point"  # Only the index finger extended
    FIST = "fist"  # All fingers (except thumb) curled
    OPEN_PALM = "open_palm"  # All five fingers extended

    def __str__(self) -> str:
        return self.value


# Gestures that can trigger a mutation of the voxel store in some mode
ACTION_GESTURES: set[Gestures] = {Gestures.PINCH, Gestures.FIST, Gestures.OPEN_PALM}

# Gestures only used as a visual cue by the renderer
PREVIEW_GESTURES: set[Gestures] = {Gestures.POINT}
