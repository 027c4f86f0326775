from .buffer import Sample, SignalBuffer
from .landmarks import HandLandmark, LandmarkFrame, Point3D

__all__ = [
    "HandLandmark",
    "LandmarkFrame",
    "Point3D",
    "Sample",
    "SignalBuffer",
]
