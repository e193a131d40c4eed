import pytest

from voxel_gestures.colors import DEFAULT_PALETTE
from voxel_gestures.geometry import GridCell
from voxel_gestures.gestures import Gestures
from voxel_gestures.modes import Action, ActionEvent, Mode, ModeController
from voxel_gestures.store import VoxelStore


@pytest.fixture
def store(clock):
    return VoxelStore(grid_size=16, clock=clock)


@pytest.fixture
def controller(store):
    return ModeController(store)


def event(action, cell=GridCell(1, 0, 1), gesture=Gestures.PINCH, mode=Mode.BUILD):
    return ActionEvent(action=action, cell=cell, gesture=gesture, mode=mode, timestamp=0)


def test_toggle_mode(controller):
    assert controller.mode is Mode.BUILD
    assert controller.toggle_mode() is Mode.DELETE
    assert controller.toggle_mode() is Mode.BUILD


@pytest.mark.parametrize(
    ("mode", "gesture", "expected"),
    [
        (Mode.BUILD, Gestures.PINCH, Action.ADD),
        (Mode.BUILD, Gestures.FIST, None),
        (Mode.BUILD, Gestures.POINT, None),
        (Mode.BUILD, Gestures.NONE, None),
        (Mode.DELETE, Gestures.PINCH, Action.REMOVE),
        (Mode.DELETE, Gestures.FIST, Action.REMOVE),
        (Mode.DELETE, Gestures.OPEN_PALM, None),
        (Mode.DELETE, Gestures.POINT, None),
    ],
)
def test_resolve(controller, mode, gesture, expected):
    assert controller.resolve(mode, gesture) is expected


def test_open_palm_clears_only_a_non_empty_store(controller, store):
    assert controller.resolve(Mode.BUILD, Gestures.OPEN_PALM) is None
    store.add_voxel(0, 0, 0, "#000000")
    assert controller.resolve(Mode.BUILD, Gestures.OPEN_PALM) is Action.CLEAR


def test_apply(controller, store):
    assert controller.apply(event(Action.ADD)) is True
    assert store.get_voxel_at(1, 0, 1).color == DEFAULT_PALETTE[0]
    assert controller.apply(event(Action.REMOVE, gesture=Gestures.FIST, mode=Mode.DELETE)) is True
    assert store.is_empty
    store.add_voxel(2, 0, 2, "#000000")
    controller.apply(event(Action.CLEAR, gesture=Gestures.OPEN_PALM))
    assert store.is_empty


def test_remove_at_empty_cell_is_harmless(controller, store):
    store.add_voxel(3, 0, 3, "#000000")
    assert controller.apply(event(Action.REMOVE, mode=Mode.DELETE)) is True
    assert store.count == 1


def test_colors(controller, store):
    assert controller.select_color(1) is True
    assert controller.color == "#EF4444"
    assert controller.select_color(42) is False
    assert controller.select_color(-1) is False
    assert controller.color == "#EF4444"
    assert controller.set_color("#abcdef") == "#ABCDEF"
    with pytest.raises(ValueError):
        controller.set_color("#abc")
    controller.apply(event(Action.ADD))
    assert store.get_voxel_at(1, 0, 1).color == "#ABCDEF"


def test_custom_palette(store):
    controller = ModeController(store, palette=["#111111", "#222222"], color_index=1)
    assert controller.color == "#222222"
    assert ModeController(store, palette=["#111111"], color_index=5).color == "#111111"


def test_empty_palette(store):
    with pytest.raises(ValueError, match="at least one color"):
        ModeController(store, palette=[])
