from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from fingertap.detection import TapEvent
from fingertap.utils import Point3D


@dataclass(frozen=True)
class FrameRecord:
    """
    Audit record of one frame accepted into the trial signal.
    """

    timestamp: int
    """Milliseconds since the trial started."""

    normalized_distance: float
    """Thumb-index distance as a percentage of the hand size."""

    hand_size: float
    """Wrist to middle-MCP distance in pixels."""

    thumb_tip: Point3D
    index_tip: Point3D

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "normalized_distance": self.normalized_distance,
            "hand_size": self.hand_size,
            "thumb_tip": self.thumb_tip.to_dict(),
            "index_tip": self.index_tip.to_dict(),
        }


@dataclass(frozen=True)
class TrialResult:
    """
    Outcome of one finished trial. Immutable once produced.
    """

    success: bool
    """Whether the tap count reached the configured minimum."""

    hand: str
    """Hand under assessment ('left' / 'right')."""

    tap_count: int
    frequency: float
    """Tapping frequency in Hz."""
    amplitude: float
    """Mean peak opening between taps, in percent of hand size."""
    rhythm_variability: float
    """Coefficient of variation of inter-tap intervals, in percent."""
    amplitude_decrement: float
    """First-third to last-third amplitude decline, in percent."""
    duration: int
    """Time of the last sample in ms, 0 if there was none."""

    tap_events: Tuple[TapEvent, ...] = ()
    distance_signal: Tuple[float, ...] = ()
    time_signal: Tuple[int, ...] = ()
    frame_data: Tuple[FrameRecord, ...] = field(default=(), repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        return {
            "success": self.success,
            "hand": self.hand,
            "tap_count": self.tap_count,
            "frequency": self.frequency,
            "amplitude": self.amplitude,
            "rhythm_variability": self.rhythm_variability,
            "amplitude_decrement": self.amplitude_decrement,
            "duration": self.duration,
            "tap_events": [e.to_dict() for e in self.tap_events],
            "raw_data": {
                "distance_signal": list(self.distance_signal),
                "time_signal": list(self.time_signal),
                "frame_data": [f.to_dict() for f in self.frame_data],
            },
        }


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a lifecycle command. Rejected commands are reported here
    instead of being raised.
    """

    success: bool
    error: Optional[str] = None
    """Reason the command was rejected."""
    result: Optional[TrialResult] = None
    """The trial result, for a successful stop."""


OK = OperationResult(True)
"""Successful command with no payload."""
