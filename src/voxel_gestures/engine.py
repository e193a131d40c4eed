from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator
from contextlib import suppress
from pathlib import Path
from typing import Any, NamedTuple

from . import persistence
from .camera import PerspectiveCamera, RayCaster
from .classifier import GestureClassifier
from .clock import Clock, MonotonicClock
from .config import Config
from .debouncer import GestureDebouncer
from .geometry import GridCell
from .gestures import PREVIEW_GESTURES, Gestures
from .mapper import SpatialMapper
from .models.landmarks import HandSample, Landmark
from .models.voxels import Voxel
from .modes import ActionEvent, Mode, ModeController
from .persistence import LoadResult
from .store import VoxelStore

logger = logging.getLogger(__name__)

FPS_WINDOW_MS = 1000


class FpsCounter:
    """Count frames and publish the frame rate once per second."""

    def __init__(self, clock: Clock, window_ms: int = FPS_WINDOW_MS) -> None:
        self.clock = clock
        self.window_ms = window_ms
        self.fps = 0
        self.frames_count = 0
        self._last_time = clock.now()

    def tick(self) -> int:
        self.frames_count += 1
        now = self.clock.now()
        elapsed = now - self._last_time
        if elapsed >= self.window_ms:
            self.fps = round(self.frames_count * 1000 / elapsed)
            self.frames_count = 0
            self._last_time = now
        return self.fps


class FrameState(NamedTuple):
    """Everything the renderer needs to draw a frame."""

    voxels: list[tuple[GridCell, Voxel]]  # Sorted by cell
    cursor: GridCell | None  # Targeted cell, for the preview highlight
    mode: Mode
    gesture: Gestures | None  # None when no hand is visible
    position: Landmark | None  # Index fingertip, normalized coordinates
    voxel_count: int
    color: str
    event: ActionEvent | None  # Action fired during this frame, if any
    fps: int

    @property
    def is_preview(self) -> bool:
        return self.cursor is not None and self.gesture in PREVIEW_GESTURES

    def to_dict(self) -> dict[str, Any]:
        """Export frame state as a dictionary."""
        return {
            "voxels": [{"x": cell.x, "y": cell.y, "z": cell.z, **voxel.to_dict()} for cell, voxel in self.voxels],
            "cursor": list(self.cursor) if self.cursor is not None else None,
            "mode": self.mode.value,
            "gesture": self.gesture.value if self.gesture is not None else None,
            "position": self.position.to_dict() if self.position is not None else None,
            "voxel_count": self.voxel_count,
            "color": self.color,
            "event": self.event.to_dict() if self.event is not None else None,
            "fps": self.fps,
        }


class VoxelEngine:
    """A voxel editing session.

    Feed it one hand sample (or `None`) per frame with `process_frame`, draw the returned
    `FrameState`. The other public methods are the control surface for key bindings and
    menus; confirmation dialogs (e.g. before `clear`) are up to the caller.
    """

    def __init__(self, config: Config | None = None, clock: Clock | None = None) -> None:
        self.config = config or Config()
        self.clock: Clock = clock or MonotonicClock()

        self.store = VoxelStore(grid_size=self.config.grid.size, clock=self.clock)
        self.controller = ModeController(
            self.store,
            palette=self.config.colors.palette,
            color_index=self.config.colors.default_index,
        )
        self.classifier = GestureClassifier.from_config(self.config.classifier)
        self.mapper = SpatialMapper.from_config(self.config.grid)
        self.debouncer = GestureDebouncer.from_config(self.controller.resolve, self.config.debounce)
        self.fps_counter = FpsCounter(self.clock)
        self.default_camera: RayCaster = PerspectiveCamera.from_config(self.config.camera)

        self.cursor: GridCell | None = None
        self.gesture: Gestures | None = None
        self.last_event: ActionEvent | None = None

    @property
    def mode(self) -> Mode:
        return self.controller.mode

    @property
    def voxel_count(self) -> int:
        return self.store.count

    def process_frame(self, sample: HandSample | None, camera: RayCaster | None = None) -> FrameState:
        """Run one sample through classification, mapping, debouncing and, maybe, a store mutation."""
        now = self.clock.now()
        classification = self.classifier.classify(sample)
        self.gesture = classification.gesture
        self.cursor = self.mapper.map(classification.position, camera or self.default_camera)

        event = self.debouncer.update(self.gesture, self.cursor, self.mode, now)
        if event is not None:
            self.controller.apply(event)
            self.last_event = event

        return FrameState(
            voxels=list(self.store),
            cursor=self.cursor,
            mode=self.mode,
            gesture=self.gesture,
            position=classification.position,
            voxel_count=self.store.count,
            color=self.controller.color,
            event=event,
            fps=self.fps_counter.tick(),
        )

    def run(self, feed: LatestSampleFeed, camera: RayCaster | None = None) -> Iterator[FrameState]:
        """Process samples from a feed until it is closed."""
        for sample in feed.samples():
            yield self.process_frame(sample, camera)

    # Control surface

    def toggle_mode(self) -> Mode:
        return self.controller.toggle_mode()

    def set_mode(self, mode: Mode | str) -> Mode:
        self.controller.mode = Mode(mode)
        return self.controller.mode

    def clear(self) -> int:
        """Remove all voxels. Returns the number of voxels removed."""
        removed = self.store.count
        self.store.clear_all()
        logger.info("Cleared %d voxel(s)", removed)
        return removed

    def select_color(self, index: int) -> bool:
        return self.controller.select_color(index)

    def set_color(self, color: str) -> str:
        return self.controller.set_color(color)

    def resize(self, grid_size: int) -> int:
        """Change the grid size. Voxels out of the new grid are dropped; returns their number."""
        dropped = self.store.resize(grid_size)
        self.mapper.grid_size = grid_size
        self.debouncer.reset()
        return dropped

    def save(self) -> Path:
        """Save the world to the configured save file."""
        return persistence.save_to_file(self.store, self.config.storage.get_save_path())

    def load(self) -> LoadResult:
        """Load the world from the configured save file. The world is unchanged on failure."""
        return persistence.load_from_file(self.store, self.config.storage.get_save_path())

    def export_to_file(self, path: Path | str) -> Path:
        """Export the world to `path` (a file, or a directory to create a timestamped file in)."""
        return persistence.save_to_file(self.store, path)

    def import_from_file(self, path: Path | str) -> LoadResult:
        return persistence.load_from_file(self.store, path)


_STOP = object()


class LatestSampleFeed:
    """Hand samples from a capture thread to the processing thread, latest sample wins.

    The queue holds a single sample: when the consumer is late, the older sample is
    replaced by the newer one. `None` is a valid sample (no hand in the frame).
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[object] = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self.dropped_count = 0
        self.closed = False

    def _put(self, item: object) -> None:
        with self._lock:
            try:
                self._queue.put_nowait(item)
            except queue.Full:
                with suppress(queue.Empty):  # The consumer may have just taken it
                    self._queue.get_nowait()
                    self.dropped_count += 1
                self._queue.put_nowait(item)

    def put(self, sample: HandSample | None) -> None:
        if self.closed:
            raise RuntimeError("Cannot put a sample in a closed feed")
        self._put(sample)

    def close(self) -> None:
        """Stop the consumer. A sample still in the queue is discarded."""
        self.closed = True
        self._put(_STOP)

    def samples(self, timeout: float = 0.1) -> Iterator[HandSample | None]:
        """Generator that yields samples from the queue until the feed is closed."""
        while True:
            try:
                item = self._queue.get(timeout=timeout)
            except queue.Empty:
                if self.closed:
                    break
                continue
            if item is _STOP:
                break
            yield item  # type: ignore[misc]
