"""
Capture Module - Webcam setup and threaded frame reading.
"""

from .camera import ThreadedCamera, setup_camera

__all__ = [
    'ThreadedCamera',
    'setup_camera',
]
