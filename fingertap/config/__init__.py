"""
Config Module - Defaults and per-session configuration.

This module provides:
- Grouped default constants (config.py)
- The AssessmentConfig options object (config.py)
- Command line parsing for the CLI (args_parser.py)
"""

from .config import (
    AssessmentConfig,
    CameraConfig,
    MediaPipeConfig,
    TapDetectionConfig,
    TrialDefaults,
    UIConfig,
    config,
)

__all__ = [
    'AssessmentConfig',
    'CameraConfig',
    'MediaPipeConfig',
    'TapDetectionConfig',
    'TrialDefaults',
    'UIConfig',
    'config',
]
