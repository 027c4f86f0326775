"""
Processing Module - From landmark frames to a smoothed distance signal.

This module provides:
- Hand-size normalization of landmark frames (normalizer.py)
- Moving-average smoothing and velocity estimation (signal.py)
"""

from .normalizer import NormalizedSample, normalize_frame
from .signal import moving_average, velocity

__all__ = [
    'NormalizedSample',
    'normalize_frame',
    'moving_average',
    'velocity',
]
