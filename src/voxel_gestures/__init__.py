"""Gesture-driven voxel editing: hand landmarks in, voxel world out."""

from .camera import PerspectiveCamera, Ray, RayCaster
from .classifier import Classification, GestureClassifier
from .clock import Clock, ManualClock, MonotonicClock
from .config import Config
from .debouncer import DebounceState, GestureDebouncer
from .engine import FrameState, LatestSampleFeed, VoxelEngine
from .geometry import GridCell
from .gestures import Gestures
from .mapper import SpatialMapper
from .models import HandLandmark, HandSample, Landmark, Voxel, VoxelRecord
from .modes import Action, ActionEvent, Mode, ModeController
from .persistence import LoadError, LoadResult
from .store import VoxelStore

__all__ = [
    # Core classes
    "VoxelEngine",
    "FrameState",
    "LatestSampleFeed",
    "GestureClassifier",
    "Classification",
    "GestureDebouncer",
    "DebounceState",
    "SpatialMapper",
    "ModeController",
    "VoxelStore",
    # Models
    "GridCell",
    "HandLandmark",
    "HandSample",
    "Landmark",
    "Voxel",
    "VoxelRecord",
    "Action",
    "ActionEvent",
    "Mode",
    "Gestures",
    # Camera and time
    "PerspectiveCamera",
    "Ray",
    "RayCaster",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    # Persistence
    "LoadError",
    "LoadResult",
    # Configuration
    "Config",
]
