"""
UI Module - Overlay rendering for the assessment window.

This module provides:
- Fingertip and thumb-index line overlay
- Trial status and FPS text
"""

from .display import (
    draw_hand_overlay,
    draw_status_overlay,
    new_fps_state,
)

__all__ = [
    'draw_hand_overlay',
    'draw_status_overlay',
    'new_fps_state',
]
