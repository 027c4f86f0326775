"""
Detection Module - Tap event detection on the distance signal.

This module provides:
- The two candidate generators and the merge pass (tap_detector.py)
- TapDetector, which combines them with configured thresholds
"""

from .tap_detector import (
    TapDetector,
    TapEvent,
    local_minimum_candidates,
    merge_candidates,
    rate_of_change_candidates,
)

__all__ = [
    'TapDetector',
    'TapEvent',
    'local_minimum_candidates',
    'merge_candidates',
    'rate_of_change_candidates',
]
