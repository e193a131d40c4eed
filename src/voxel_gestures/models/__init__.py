from .landmarks import HandLandmark, HandSample, Landmark, LandmarkGroups
from .voxels import Voxel, VoxelRecord

__all__ = [
    "HandLandmark",
    "HandSample",
    "Landmark",
    "LandmarkGroups",
    "Voxel",
    "VoxelRecord",
]
