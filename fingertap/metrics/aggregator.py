"""
Trial-level finger tapping metrics.

Reduces the accepted tap events and the smoothed distance signal of a
finished trial into the clinical measures:

- Frequency: taps per second, from the mean inter-tap interval
- Amplitude: mean peak opening between consecutive taps
- Rhythm variability: coefficient of variation of the intervals (%)
- Amplitude decrement: decline of the opening amplitude from the first to
  the last third of the trial (%), a fatigue indicator

Missing data is not an error: every metric falls back to 0 when there is
nothing to average.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from fingertap.detection import TapEvent


@dataclass(frozen=True)
class TrialMetrics:
    """
    Aggregated metrics of one trial.
    """

    tap_count: int
    frequency: float
    """Hz."""
    amplitude: float
    """Mean per-interval peak of the smoothed signal."""
    rhythm_variability: float
    """Coefficient of variation of inter-tap intervals, in percent."""
    amplitude_decrement: float
    """First-third to last-third amplitude decline, in percent."""
    success: bool
    """Whether the trial reached the minimum number of taps."""


def inter_tap_intervals(events: Sequence[TapEvent]) -> List[float]:
    """
    Time differences in ms between consecutive tap events.
    """
    return [float(b.time - a.time) for a, b in zip(events, events[1:])]


def interval_amplitudes(
    events: Sequence[TapEvent], smoothed: Sequence[float]
) -> List[float]:
    """
    Peak opening between each pair of consecutive taps.

    For taps at indices `a` and `b` this is the maximum of `smoothed[a:b]`,
    clipped to the signal length; an empty range gives 0.
    """
    amplitudes = []
    for a, b in zip(events, events[1:]):
        window = smoothed[a.index : min(b.index, len(smoothed))]
        amplitudes.append(max(0.0, float(np.max(window))) if len(window) else 0.0)
    return amplitudes


def frequency(intervals: Sequence[float]) -> float:
    """
    Tapping frequency in Hz, `1000 / mean(intervals)`.
    """
    if len(intervals) == 0:
        return 0.0
    mean = float(np.mean(intervals))
    return 1000.0 / mean if mean > 0 else 0.0


def rhythm_variability(intervals: Sequence[float]) -> float:
    """
    Coefficient of variation of the intervals in percent, using the
    population standard deviation.
    """
    if len(intervals) == 0:
        return 0.0
    mean = float(np.mean(intervals))
    if mean == 0:
        return 0.0
    return float(np.std(intervals)) / mean * 100


def amplitude_decrement(amplitudes: Sequence[float]) -> float:
    """
    Percentage decline from the mean of the first third of the amplitudes to
    the mean of the last third. The middle third is not used.
    Needs at least 3 amplitudes, otherwise 0.
    """
    if len(amplitudes) < 3:
        return 0.0

    third = len(amplitudes) // 3
    first = float(np.mean(amplitudes[:third]))
    last = float(np.mean(amplitudes[-third:]))

    if first == 0:
        return 0.0
    return (first - last) / first * 100


def compute_metrics(
    events: Sequence[TapEvent], smoothed: Sequence[float], min_required_taps: int
) -> TrialMetrics:
    """
    Compute all trial metrics.

    :param events: Final, time-ordered tap events.
    :param smoothed: Smoothed distance signal the events index into.
    :param min_required_taps: Tap count needed for `success`.
    """
    intervals = inter_tap_intervals(events)
    amplitudes = interval_amplitudes(events, smoothed)

    return TrialMetrics(
        tap_count=len(events),
        frequency=frequency(intervals),
        amplitude=float(np.mean(amplitudes)) if amplitudes else 0.0,
        rhythm_variability=rhythm_variability(intervals),
        amplitude_decrement=amplitude_decrement(amplitudes),
        success=len(events) >= min_required_taps,
    )
