"""
Core Module - Trial lifecycle and results.

This module contains the parts of FingerTap that own a trial:
- Result records (results.py)
- The pure lifecycle state machine (trial_state.py)
- The trial controller driving the signal pipeline (trial_controller.py)
"""

from .results import FrameRecord, OperationResult, TrialResult
from .trial_state import (
    Command,
    EventType,
    TrialEvent,
    TrialState,
    Transition,
    transition,
)
from .trial_controller import TrialContext, TrialController

__all__ = [
    # Results
    'FrameRecord',
    'OperationResult',
    'TrialResult',
    # State machine
    'Command',
    'EventType',
    'TrialEvent',
    'TrialState',
    'Transition',
    'transition',
    # Controller
    'TrialContext',
    'TrialController',
]
