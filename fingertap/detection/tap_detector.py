"""
Tap detection over the smoothed distance signal.

A tap is a finger-closing motion. Two complementary heuristics propose
candidate sample indices:

1. Rate of change
   - A sample-to-sample drop larger than CLOSING_VELOCITY_THRESHOLD
   - Catches fast, shallow taps that never reach a clear minimum

2. Local minimum
   - A 5-sample valley below CLOSED_THRESHOLD
   - Catches slow, low-amplitude taps with no sharp drop

Each method enforces the minimum spacing against its own previous candidate
only, so the two can still fire inside the same window. `merge_candidates`
sorts the union by time and applies the spacing once more across both
methods; that pass is what guarantees the final sequence is spaced at least
MIN_PEAK_DISTANCE_MS apart.

Everything here is a pure function of an immutable signal snapshot. The
detector is rerun from scratch every time the signal grows.

USAGE:
    from fingertap.detection import TapDetector

    detector = TapDetector(min_peak_distance=30, closed_threshold=30)
    events = detector.detect(smoothed, times)
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

from fingertap.config import TapDetectionConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TapEvent:
    """
    A detected finger-closing motion.
    """

    index: int
    """Position of the tap in the sample sequence."""

    time: int
    """Milliseconds since the trial started."""

    amplitude: float
    """Signal value at the tap sample."""

    def to_dict(self) -> Dict[str, float]:
        return {"index": self.index, "time": self.time, "amplitude": self.amplitude}


def _check_aligned(signal: Sequence[float], times: Sequence[int]) -> None:
    if len(signal) != len(times):
        raise ValueError(
            f"Signal and time vectors differ in length ({len(signal)} != {len(times)})"
        )


def rate_of_change_candidates(
    signal: Sequence[float],
    times: Sequence[int],
    min_peak_distance: float,
    threshold: float = TapDetectionConfig.CLOSING_VELOCITY_THRESHOLD,
) -> Dict[int, TapEvent]:
    """
    Candidates where the signal drops by more than `-threshold` in one sample.

    :param signal: Smoothed distance signal.
    :param times: Sample times in milliseconds, aligned with `signal`.
    :param min_peak_distance: A candidate must be more than this many ms after
        the previous candidate of this method.
    :param threshold: Negative per-sample change that marks a closing motion.
    :return: Candidates keyed by sample index.
    """
    _check_aligned(signal, times)

    candidates: Dict[int, TapEvent] = {}
    last_time: Optional[int] = None

    for i in range(1, len(signal)):
        if signal[i] - signal[i - 1] >= threshold:
            continue
        if last_time is not None and times[i] - last_time <= min_peak_distance:
            continue

        candidates[i] = TapEvent(i, times[i], float(signal[i]))
        last_time = times[i]

    return candidates


def is_local_minimum(signal: Sequence[float], i: int) -> bool:
    """
    Whether sample `i` is strictly below its two left neighbours and not
    above its two right neighbours.
    """
    current = signal[i]
    return (
        current < signal[i - 1]
        and current < signal[i - 2]
        and current <= signal[i + 1]
        and current <= signal[i + 2]
    )


def local_minimum_candidates(
    signal: Sequence[float],
    times: Sequence[int],
    min_peak_distance: float,
    closed_threshold: float = TapDetectionConfig.CLOSED_THRESHOLD,
    exclude: AbstractSet[int] = frozenset(),
) -> Dict[int, TapEvent]:
    """
    Candidates at 5-sample local minima below `closed_threshold`.

    :param signal: Smoothed distance signal.
    :param times: Sample times in milliseconds, aligned with `signal`.
    :param min_peak_distance: A candidate must be more than this many ms after
        the previous candidate of this method.
    :param closed_threshold: Minima at or above this value are ignored.
    :param exclude: Indices already recorded by another method.
    :return: Candidates keyed by sample index.
    """
    _check_aligned(signal, times)

    candidates: Dict[int, TapEvent] = {}
    last_time: Optional[int] = None

    for i in range(2, len(signal) - 2):
        if i in exclude:
            continue
        if not is_local_minimum(signal, i) or signal[i] >= closed_threshold:
            continue
        if last_time is not None and times[i] - last_time <= min_peak_distance:
            continue

        candidates[i] = TapEvent(i, times[i], float(signal[i]))
        last_time = times[i]

    return candidates


def merge_candidates(
    candidates: Iterable[TapEvent], min_peak_distance: float
) -> List[TapEvent]:
    """
    Merge candidates from all methods into the final tap sequence.

    Candidates are walked in time order (index breaks ties) and kept only when
    they are at least `min_peak_distance` ms after the last kept event.
    """
    accepted: List[TapEvent] = []

    for event in sorted(candidates, key=lambda e: (e.time, e.index)):
        if accepted and event.time - accepted[-1].time < min_peak_distance:
            continue
        accepted.append(event)

    return accepted


class TapDetector:
    """
    Dual-method tap detector.

    Holds the detection thresholds and combines the two candidate generators
    with the merge pass. Stateless between calls.
    """

    def __init__(
        self,
        min_peak_distance=None,
        closed_threshold=None,
        closing_velocity_threshold=None,
    ):
        """
        Initialize the detector.

        Args:
            min_peak_distance (float, optional): Minimum ms between taps
            closed_threshold (float, optional): Upper bound for local-minimum taps
            closing_velocity_threshold (float, optional): Per-sample drop for rate-of-change taps

        Any argument left as None uses the TapDetectionConfig default.
        """
        cfg = TapDetectionConfig
        self.min_peak_distance = (
            min_peak_distance if min_peak_distance is not None else cfg.MIN_PEAK_DISTANCE_MS
        )
        self.closed_threshold = (
            closed_threshold if closed_threshold is not None else cfg.CLOSED_THRESHOLD
        )
        self.closing_velocity_threshold = (
            closing_velocity_threshold
            if closing_velocity_threshold is not None
            else cfg.CLOSING_VELOCITY_THRESHOLD
        )

    @classmethod
    def from_config(cls, config):
        """
        Build a detector from an AssessmentConfig.
        """
        return cls(
            min_peak_distance=config.min_peak_distance_ms,
            closed_threshold=config.closed_threshold,
        )

    def candidates(self, signal, times):
        """
        Union of both methods' candidates, keyed by index.

        Returns:
            dict: index -> TapEvent, each index recorded at most once
        """
        found = rate_of_change_candidates(
            signal, times, self.min_peak_distance, self.closing_velocity_threshold
        )
        minima = local_minimum_candidates(
            signal,
            times,
            self.min_peak_distance,
            self.closed_threshold,
            exclude=found.keys(),
        )
        found.update(minima)
        return found

    def detect(self, signal, times):
        """
        Detect taps in a smoothed signal.

        Args:
            signal (Sequence[float]): Smoothed distance signal
            times (Sequence[int]): Sample times in ms, aligned with `signal`

        Returns:
            list[TapEvent]: Time-ordered taps, spaced at least min_peak_distance apart
        """
        found = self.candidates(signal, times)
        events = merge_candidates(found.values(), self.min_peak_distance)

        logger.debug(
            f"{len(found)} tap candidates, {len(events)} accepted over {len(signal)} samples"
        )
        return events
