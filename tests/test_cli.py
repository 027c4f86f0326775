"""
Tests for result reporting in the command line entry point.
"""

import json
import logging

from finger_tapping import report
from fingertap.core import TrialResult
from fingertap.detection import TapEvent

logger = logging.getLogger(__name__)


def sample_result():
    return TrialResult(
        success=True,
        hand="right",
        tap_count=2,
        frequency=2.0,
        amplitude=55.0,
        rhythm_variability=0.0,
        amplitude_decrement=0.0,
        duration=1000,
        tap_events=(TapEvent(3, 150, 20.0), TapEvent(13, 650, 21.0)),
        distance_signal=(60.0, 20.0),
        time_signal=(0, 50),
    )


def test_report_text(capsys):
    report(sample_result())
    out = capsys.readouterr().out

    assert "Taps:                2" in out
    assert "2.00 Hz" in out
    assert "Valid trial:         yes" in out


def test_report_json(capsys):
    report(sample_result(), as_json=True)
    data = json.loads(capsys.readouterr().out)

    assert data["tap_count"] == 2
    assert data["tap_events"][1] == {"index": 13, "time": 650, "amplitude": 21.0}
    assert data["raw_data"]["time_signal"] == [0, 50]
