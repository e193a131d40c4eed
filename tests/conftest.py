from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pytest

from voxel_gestures.camera import Ray
from voxel_gestures.clock import ManualClock
from voxel_gestures.models.landmarks import NB_LANDMARKS, HandLandmark, HandSample

Point = tuple[float, float, float]

WRIST: Point = (0.5, 0.9, 0.0)

# Fingertips far from the wrist (distance ~0.4)
FAR: dict[HandLandmark, Point] = {
    HandLandmark.THUMB_TIP: (0.2, 0.6, 0.0),
    HandLandmark.INDEX_FINGER_TIP: (0.4, 0.5, 0.0),
    HandLandmark.MIDDLE_FINGER_TIP: (0.5, 0.5, 0.0),
    HandLandmark.RING_FINGER_TIP: (0.6, 0.5, 0.0),
    HandLandmark.PINKY_TIP: (0.7, 0.6, 0.0),
}

# Fingertips close to the wrist (distance < 0.1)
CLOSE: dict[HandLandmark, Point] = {
    HandLandmark.THUMB_TIP: (0.45, 0.88, 0.0),
    HandLandmark.INDEX_FINGER_TIP: (0.48, 0.82, 0.0),
    HandLandmark.MIDDLE_FINGER_TIP: (0.5, 0.82, 0.0),
    HandLandmark.RING_FINGER_TIP: (0.52, 0.84, 0.0),
    HandLandmark.PINKY_TIP: (0.54, 0.86, 0.0),
}


def make_hand(tips: Mapping[HandLandmark, Point], wrist: Point = WRIST) -> HandSample:
    """Build a sample with all joints on the wrist, except the given tips."""
    points = [wrist] * NB_LANDMARKS
    for landmark, point in tips.items():
        points[landmark] = point
    return HandSample.from_points(points)


class Hands:
    """Synthetic hands, one per gesture."""

    @staticmethod
    def open_palm() -> HandSample:
        return make_hand(FAR)

    @staticmethod
    def fist() -> HandSample:
        return make_hand({**CLOSE, HandLandmark.THUMB_TIP: (0.4, 0.8, 0.0)})

    @staticmethod
    def point() -> HandSample:
        return make_hand({**CLOSE, HandLandmark.INDEX_FINGER_TIP: FAR[HandLandmark.INDEX_FINGER_TIP]})

    @staticmethod
    def pinch() -> HandSample:
        # Every tip far from the wrist (an open palm too), but thumb on index
        return make_hand({**FAR, HandLandmark.THUMB_TIP: (0.41, 0.51, 0.0)})

    @staticmethod
    def nothing() -> HandSample:
        # Index and middle extended, others curled: matches no rule
        return make_hand(
            {
                **CLOSE,
                HandLandmark.INDEX_FINGER_TIP: FAR[HandLandmark.INDEX_FINGER_TIP],
                HandLandmark.MIDDLE_FINGER_TIP: FAR[HandLandmark.MIDDLE_FINGER_TIP],
            }
        )


class TopDownCamera:
    """Rays going straight down, the screen covering 16x16 world units around the origin."""

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Ray:
        return Ray.from_points((ndc_x * 8, 10.0, -ndc_y * 8), (0.0, -1.0, 0.0))


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def hands() -> type[Hands]:
    return Hands


@pytest.fixture
def top_down_camera() -> TopDownCamera:
    return TopDownCamera()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
