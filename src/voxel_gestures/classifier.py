"""Landmarks to gesture classification.

Gestures are described by an ordered list of rules, evaluated top to bottom: the first
matching rule wins, so the order of `GestureClassifier.rules` *is* the priority between
gestures (a hand that is both pinching and showing an open palm is a pinch).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple

from .gestures import Gestures
from .models.landmarks import HandLandmark, HandSample, Landmark, LandmarkGroups

if TYPE_CHECKING:
    from .config import ClassifierConfig

DEFAULT_PINCH_THRESHOLD = 0.05
DEFAULT_EXTENDED_THRESHOLD = 0.15


class Classification(NamedTuple):
    """Result of the classification of one sample.

    Both values are `None` when there was no hand in the frame, which is different from
    `Gestures.NONE` (a hand is there but no gesture was recognized).
    """

    gesture: Gestures | None
    position: Landmark | None

    @property
    def has_hand(self) -> bool:
        return self.gesture is not None


NO_HAND = Classification(None, None)


class GestureRule(NamedTuple):
    gesture: Gestures
    matches: Callable[[HandSample], bool]


class GestureClassifier:
    def __init__(
        self,
        pinch_threshold: float = DEFAULT_PINCH_THRESHOLD,
        extended_threshold: float = DEFAULT_EXTENDED_THRESHOLD,
    ) -> None:
        self.pinch_threshold = pinch_threshold
        self.extended_threshold = extended_threshold

        # Order matters: first match wins
        self.rules: list[GestureRule] = [
            GestureRule(Gestures.PINCH, self.is_pinch),
            GestureRule(Gestures.POINT, self.is_point),
            GestureRule(Gestures.FIST, self.is_fist),
            GestureRule(Gestures.OPEN_PALM, self.is_open_palm),
        ]

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> GestureClassifier:
        return cls(pinch_threshold=config.pinch_threshold, extended_threshold=config.extended_threshold)

    def _tip_distance(self, sample: HandSample, tip: HandLandmark) -> float:
        return sample.distance(HandLandmark.WRIST, tip)

    def _is_extended(self, sample: HandSample, tip: HandLandmark) -> bool:
        return self._tip_distance(sample, tip) > self.extended_threshold

    def _is_curled(self, sample: HandSample, tip: HandLandmark) -> bool:
        return self._tip_distance(sample, tip) < self.extended_threshold

    def is_pinch(self, sample: HandSample) -> bool:
        return sample.thumb_tip.distance_to(sample.index_tip) < self.pinch_threshold

    def is_point(self, sample: HandSample) -> bool:
        return self._is_extended(sample, HandLandmark.INDEX_FINGER_TIP) and all(
            self._is_curled(sample, tip) for tip in LandmarkGroups.CURLED_FOR_POINT
        )

    def is_fist(self, sample: HandSample) -> bool:
        return all(self._is_curled(sample, tip) for tip in LandmarkGroups.FINGER_TIPS_EXCEPT_THUMB)

    def is_open_palm(self, sample: HandSample) -> bool:
        return all(self._is_extended(sample, tip) for tip in LandmarkGroups.FINGER_TIPS)

    def detect(self, sample: HandSample) -> Gestures:
        """Return the gesture of the first matching rule, or `Gestures.NONE`."""
        for rule in self.rules:
            if rule.matches(sample):
                return rule.gesture
        return Gestures.NONE

    def classify(self, sample: HandSample | None) -> Classification:
        """Classify a sample. The position is always the index fingertip when a hand is present."""
        if sample is None:
            return NO_HAND
        return Classification(self.detect(sample), sample.index_tip)
