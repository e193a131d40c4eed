import pytest

from voxel_gestures.classifier import NO_HAND, GestureClassifier
from voxel_gestures.config import ClassifierConfig
from voxel_gestures.gestures import Gestures
from voxel_gestures.models.landmarks import HandLandmark, HandSample


@pytest.fixture
def classifier():
    return GestureClassifier()


def test_no_hand(classifier):
    result = classifier.classify(None)
    assert result == NO_HAND
    assert result.gesture is None
    assert result.position is None
    assert not result.has_hand


@pytest.mark.parametrize(
    ("hand", "expected"),
    [
        ("pinch", Gestures.PINCH),
        ("point", Gestures.POINT),
        ("fist", Gestures.FIST),
        ("open_palm", Gestures.OPEN_PALM),
        ("nothing", Gestures.NONE),
    ],
)
def test_gestures(classifier, hands, hand, expected):
    assert classifier.classify(getattr(hands, hand)()).gesture is expected


def test_pinch_wins_over_open_palm(classifier, hands):
    sample = hands.pinch()
    assert classifier.is_pinch(sample)
    assert classifier.is_open_palm(sample)
    assert classifier.classify(sample).gesture is Gestures.PINCH


def test_point_is_not_a_fist(classifier, hands):
    sample = hands.point()
    assert classifier.is_point(sample)
    assert not classifier.is_fist(sample)


def test_rules_order_is_the_priority(classifier):
    assert [rule.gesture for rule in classifier.rules] == [
        Gestures.PINCH,
        Gestures.POINT,
        Gestures.FIST,
        Gestures.OPEN_PALM,
    ]


def test_position_is_index_tip_whatever_the_gesture(classifier, hands):
    for sample in (hands.pinch(), hands.fist(), hands.open_palm(), hands.nothing()):
        result = classifier.classify(sample)
        assert result.position == sample[HandLandmark.INDEX_FINGER_TIP]
        assert result.has_hand


def test_distance_uses_depth(classifier, hands):
    # Same x/y for thumb and index, but far apart in depth: not a pinch
    points = hands.pinch().to_list()
    points[HandLandmark.THUMB_TIP] = [*points[HandLandmark.INDEX_FINGER_TIP][:2], 0.2]
    assert not classifier.is_pinch(HandSample.from_points(points))


def test_thresholds_can_be_overridden(hands):
    sample = hands.fist()  # thumb and index tips ~0.08 apart
    assert GestureClassifier().classify(sample).gesture is Gestures.FIST
    assert GestureClassifier(pinch_threshold=0.1).classify(sample).gesture is Gestures.PINCH
    # Every tip now counts as extended
    assert GestureClassifier(extended_threshold=0.01).classify(hands.fist()).gesture is Gestures.OPEN_PALM


def test_from_config(hands):
    classifier = GestureClassifier.from_config(ClassifierConfig(pinch_threshold=0.1, extended_threshold=0.2))
    assert classifier.pinch_threshold == 0.1
    assert classifier.extended_threshold == 0.2


def test_sample_needs_21_landmarks():
    with pytest.raises(ValueError):
        HandSample.from_points([(0.0, 0.0, 0.0)] * 20)


def test_sample_from_objects():
    class MediaPipeLike:
        def __init__(self, x, y, z):
            self.x, self.y, self.z = x, y, z

    sample = HandSample.from_points([MediaPipeLike(0.1, 0.2, 0.3)] * 21)
    assert sample.wrist == (0.1, 0.2, 0.3)


def test_pinch_measures_thumb_tip_to_index_tip(classifier, hands):
    sample = hands.pinch()
    assert sample.thumb_tip == sample[HandLandmark.THUMB_TIP]
    assert sample.index_tip == sample[HandLandmark.INDEX_FINGER_TIP]
    assert sample.thumb_tip.distance_to(sample.index_tip) < classifier.pinch_threshold
    assert classifier.is_pinch(sample)
    assert not classifier.is_pinch(hands.open_palm())
