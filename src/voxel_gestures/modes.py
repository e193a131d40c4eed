"""Editing modes and the mapping of gestures to store operations.

| Mode   | Gesture        | Action                              |
|--------|----------------|-------------------------------------|
| build  | pinch          | add a voxel with the current color  |
| build  | open_palm      | clear everything (if not empty)     |
| delete | pinch, fist    | remove the voxel                    |

Anything else, `point` included, does nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .colors import DEFAULT_PALETTE, normalize_color
from .gestures import ACTION_GESTURES, Gestures
from .geometry import GridCell
from .store import VoxelStore

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    BUILD = "build"
    DELETE = "delete"

    def toggle(self) -> Mode:
        return Mode.DELETE if self is Mode.BUILD else Mode.BUILD

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    CLEAR = "clear"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ActionEvent:
    """An action fired by the debouncer, to be applied by the `ModeController`."""

    action: Action
    cell: GridCell
    gesture: Gestures
    mode: Mode
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "cell": list(self.cell),
            "gesture": self.gesture.value,
            "mode": self.mode.value,
            "timestamp": self.timestamp,
        }


class ModeController:
    def __init__(
        self,
        store: VoxelStore,
        mode: Mode = Mode.BUILD,
        palette: Sequence[str] = DEFAULT_PALETTE,
        color_index: int = 0,
    ) -> None:
        self.store = store
        self.mode = mode
        self.palette: list[str] = [normalize_color(color) for color in palette]
        if not self.palette:
            raise ValueError("The palette needs at least one color")
        self.color: str = self.palette[color_index] if 0 <= color_index < len(self.palette) else self.palette[0]

    def toggle_mode(self) -> Mode:
        self.mode = self.mode.toggle()
        logger.info("Mode switched to %s", self.mode)
        return self.mode

    def select_color(self, index: int) -> bool:
        """Select a preset color. Returns False (and keeps the color) for an unknown index."""
        if not 0 <= index < len(self.palette):
            return False
        self.color = self.palette[index]
        return True

    def set_color(self, color: str) -> str:
        self.color = normalize_color(color)
        return self.color

    def resolve(self, mode: Mode, gesture: Gestures) -> Action | None:
        """Find the action a gesture triggers in a mode, if any."""
        if gesture not in ACTION_GESTURES:
            return None
        if mode is Mode.BUILD:
            if gesture is Gestures.PINCH:
                return Action.ADD
            if gesture is Gestures.OPEN_PALM and not self.store.is_empty:
                return Action.CLEAR
        elif mode is Mode.DELETE:
            if gesture in (Gestures.PINCH, Gestures.FIST):
                return Action.REMOVE
        return None

    def apply(self, event: ActionEvent) -> bool:
        """Apply an action to the store. Returns the result of the store operation."""
        logger.debug("Applying %s at %s (%s/%s)", event.action, event.cell, event.mode, event.gesture)
        if event.action is Action.ADD:
            return self.store.add_voxel(*event.cell, self.color)
        if event.action is Action.REMOVE:
            return self.store.remove_voxel(*event.cell)
        if event.action is Action.CLEAR:
            self.store.clear_all()
            return True
        raise ValueError(f"Unknown action {event.action!r}")
