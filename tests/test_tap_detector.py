"""
Tests for dual-method tap detection.
"""

import logging

import pytest

from fingertap.config import AssessmentConfig
from fingertap.detection import TapDetector, TapEvent
from fingertap.detection.tap_detector import (
    is_local_minimum,
    local_minimum_candidates,
    merge_candidates,
    rate_of_change_candidates,
)
from tests.fixtures.synthetic_landmarks import slow_dip, spike_taps

logger = logging.getLogger(__name__)


def test_ten_taps_at_500ms():
    """One sharp closure every 500 ms gives exactly one tap per closure."""
    times, signal = spike_taps(n_taps=10, per_period=10, frame_ms=50)

    events = TapDetector().detect(signal, times)
    logger.info(f"Detected {len(events)} taps")

    assert len(events) == 10
    assert [e.time for e in events] == [450 + 500 * k for k in range(10)]
    assert all(e.amplitude == pytest.approx(20.0) for e in events)


def test_rate_of_change_needs_a_sharp_drop():
    signal = [50.0, 48.0, 46.0, 40.0, 40.0]
    times = [0, 50, 100, 150, 200]

    found = rate_of_change_candidates(signal, times, 30)

    assert list(found) == [3]
    assert found[3] == TapEvent(3, 150, 40.0)


def test_rate_of_change_spacing_is_exclusive():
    """A candidate exactly min_peak_distance after the previous one is skipped."""
    signal = [50.0, 40.0, 30.0, 20.0]
    times = [0, 30, 60, 100]

    found = rate_of_change_candidates(signal, times, 30)

    assert sorted(found) == [1, 3]


def test_slow_dip_found_by_local_minimum_only():
    """A dip with no per-sample drop beyond the threshold is still a tap."""
    times, signal = slow_dip()
    bottom = signal.index(min(signal))

    assert rate_of_change_candidates(signal, times, 30) == {}

    events = TapDetector().detect(signal, times)
    assert [e.index for e in events] == [bottom]


def test_local_minimum_shape():
    signal = [30.0, 25.0, 20.0, 20.0, 26.0, 30.0]
    assert is_local_minimum(signal, 2)
    assert not is_local_minimum(signal, 3)


def test_local_minimum_above_closed_threshold_ignored():
    signal = [60.0, 50.0, 40.0, 50.0, 60.0]
    times = [0, 20, 40, 60, 80]

    assert local_minimum_candidates(signal, times, 30, closed_threshold=30.0) == {}
    assert list(local_minimum_candidates(signal, times, 30, closed_threshold=45.0)) == [2]


def test_local_minimum_skips_indices_of_other_method():
    signal = [40.0, 35.0, 20.0, 30.0, 40.0]
    times = [0, 20, 40, 60, 80]

    assert local_minimum_candidates(signal, times, 30, exclude={2}) == {}


def test_methods_firing_in_same_window_are_merged():
    """Each method spaces its own candidates, so the merge must drop the second tap."""
    signal = [50.0, 50.0, 40.0, 25.0, 24.0, 26.0, 27.0, 50.0]
    times = [0, 10, 20, 30, 40, 50, 60, 70]

    detector = TapDetector(min_peak_distance=30)
    found = detector.candidates(signal, times)
    assert sorted(found) == [2, 4]

    events = detector.detect(signal, times)
    assert [e.index for e in events] == [2]


def test_merge_orders_by_time():
    candidates = [
        TapEvent(9, 900, 10.0),
        TapEvent(1, 100, 10.0),
        TapEvent(5, 500, 10.0),
        TapEvent(6, 520, 10.0),
    ]

    merged = merge_candidates(candidates, 30)

    assert [e.index for e in merged] == [1, 5, 9]


def test_merge_spacing_boundary_is_inclusive():
    """Events exactly min_peak_distance apart are both kept."""
    merged = merge_candidates([TapEvent(0, 0, 1.0), TapEvent(1, 30, 1.0)], 30)
    assert len(merged) == 2


def test_final_events_respect_min_spacing():
    times, signal = spike_taps(n_taps=20, per_period=3, frame_ms=20)

    events = TapDetector(min_peak_distance=100).detect(signal, times)

    assert events
    for a, b in zip(events, events[1:]):
        assert b.time - a.time >= 100


def test_short_signals():
    detector = TapDetector()
    assert detector.detect([], []) == []
    assert detector.detect([10.0], [0]) == []


def test_misaligned_inputs_rejected():
    with pytest.raises(ValueError):
        TapDetector().detect([1.0, 2.0, 3.0], [0, 10])


def test_from_config():
    detector = TapDetector.from_config(
        AssessmentConfig(min_peak_distance_ms=80, closed_threshold=25.0)
    )
    assert detector.min_peak_distance == 80
    assert detector.closed_threshold == 25.0
    assert detector.closing_velocity_threshold == -3.0
