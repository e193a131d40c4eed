"""Turn a noisy stream of classified gestures into discrete actions.

A gesture must be held for `hold_time_ms` before it can act, which rejects single frame
misclassifications. Two actions are always at least `cooldown_ms` apart. A gesture still
held after the cooldown fires again (repeat while held). Only a change of gesture restarts
the hold timer; changing the mode does not.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from .gestures import Gestures
from .modes import Action, ActionEvent, Mode

if TYPE_CHECKING:
    from .config import DebounceConfig
    from .geometry import GridCell

DEFAULT_HOLD_TIME_MS = 200
DEFAULT_COOLDOWN_MS = 300

ActionResolver: TypeAlias = Callable[[Mode, Gestures], Action | None]

logger = logging.getLogger(__name__)


class DebounceState(enum.Enum):
    IDLE = "idle"  # No gesture, or no target
    HOLDING = "holding"  # Gesture stable, waiting for the hold time or for an action to resolve
    COOLING = "cooling"  # An action fired less than `cooldown_ms` ago


class GestureDebouncer:
    def __init__(
        self,
        resolver: ActionResolver,
        hold_time_ms: int = DEFAULT_HOLD_TIME_MS,
        cooldown_ms: int = DEFAULT_COOLDOWN_MS,
    ) -> None:
        self.resolver = resolver
        self.hold_time_ms = hold_time_ms
        self.cooldown_ms = cooldown_ms

        self.state = DebounceState.IDLE
        self.last_gesture: Gestures | None = None
        self.hold_start: int | None = None
        self.last_action_time: int | None = None

    @classmethod
    def from_config(cls, resolver: ActionResolver, config: DebounceConfig) -> GestureDebouncer:
        return cls(resolver, hold_time_ms=config.hold_time_ms, cooldown_ms=config.cooldown_ms)

    def reset(self) -> None:
        """Back to idle. The time of the last action is kept: the cooldown survives a reset."""
        self.state = DebounceState.IDLE
        self.last_gesture = None
        self.hold_start = None

    def hold_duration(self, now: int) -> int:
        return 0 if self.hold_start is None else now - self.hold_start

    def in_cooldown(self, now: int) -> bool:
        return self.last_action_time is not None and now - self.last_action_time < self.cooldown_ms

    def update(self, gesture: Gestures | None, cell: GridCell | None, mode: Mode, now: int) -> ActionEvent | None:
        """Feed one tick. Returns the action to apply, if one fires on this tick."""
        if gesture is None or cell is None:
            self.reset()
            return None

        if gesture != self.last_gesture or self.hold_start is None:
            self.last_gesture = gesture
            self.hold_start = now
            self.state = DebounceState.HOLDING
            return None

        if self.hold_duration(now) < self.hold_time_ms:
            self.state = DebounceState.HOLDING
            return None

        if self.in_cooldown(now):
            self.state = DebounceState.COOLING
            return None

        action = self.resolver(mode, gesture)
        if action is None:
            self.state = DebounceState.HOLDING
            return None

        self.last_action_time = now
        self.state = DebounceState.COOLING
        logger.debug(
            "Gesture %s held %dms in %s mode: firing %s at %s", gesture, self.hold_duration(now), mode, action, cell
        )
        return ActionEvent(action=action, cell=cell, gesture=gesture, mode=mode, timestamp=now)
