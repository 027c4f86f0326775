"""
Tracking Module - Hand landmark tracking with MediaPipe.
"""

from .hand_tracker import HandTracker, frame_from_results, handedness_label

__all__ = [
    'HandTracker',
    'frame_from_results',
    'handedness_label',
]
