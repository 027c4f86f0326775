"""
Tests for converting MediaPipe results into landmark frames.
MediaPipe itself is not loaded; results are plain namespaces with the same shape.
"""

import logging
import sys
from types import SimpleNamespace

import pytest

from fingertap.errors import TrackerUnavailableError
from fingertap.tracking import HandTracker, frame_from_results
from fingertap.tracking.hand_tracker import handedness_label

logger = logging.getLogger(__name__)


def fake_results(label="Right", hands=1):
    landmarks = [SimpleNamespace(x=0.5, y=0.01 * i, z=0.0) for i in range(21)]
    return SimpleNamespace(
        multi_hand_landmarks=[SimpleNamespace(landmark=landmarks)] * hands,
        multi_handedness=[
            SimpleNamespace(classification=[SimpleNamespace(label=label, score=0.98)])
        ] * hands,
    )


def test_frame_from_results():
    frame = frame_from_results(fake_results("Left"), 640, 480)

    assert frame.handedness == "Left"
    assert frame.middle_mcp.y == pytest.approx(0.09)
    assert frame.thumb_tip.y == pytest.approx(0.04)
    assert (frame.image_width, frame.image_height) == (640, 480)


def test_no_hand_gives_none():
    results = SimpleNamespace(multi_hand_landmarks=None, multi_handedness=None)
    assert frame_from_results(results, 640, 480) is None


def test_handedness_missing():
    results = SimpleNamespace(multi_hand_landmarks=[], multi_handedness=None)
    assert handedness_label(results) is None
    assert handedness_label(fake_results(hands=1), hand_index=1) is None


def test_missing_mediapipe_raises_tracker_error(monkeypatch):
    monkeypatch.setitem(sys.modules, "mediapipe", None)

    with pytest.raises(TrackerUnavailableError):
        HandTracker()


class RecordingDrawer:
    """Stands in for mediapipe.solutions.drawing_utils."""

    def __init__(self):
        self.calls = []

    def draw_landmarks(self, image, landmarks, connections, landmark_style, connection_style):
        self.calls.append((landmarks, connections))


def tracker_with_results(results):
    """A HandTracker with MediaPipe's drawing modules replaced, skipping model loading."""
    tracker = HandTracker.__new__(HandTracker)
    tracker.mp_drawing = RecordingDrawer()
    tracker.mp_hands = SimpleNamespace(HAND_CONNECTIONS="connections")
    tracker.mp_drawing_styles = SimpleNamespace(
        get_default_hand_landmarks_style=lambda: "landmark-style",
        get_default_hand_connections_style=lambda: "connection-style",
    )
    tracker.last_results = results
    return tracker


def test_draw_landmarks_once_per_hand():
    results = fake_results(hands=2)
    tracker = tracker_with_results(results)
    image = object()

    assert tracker.draw_landmarks(image) is image
    assert len(tracker.mp_drawing.calls) == 2
    assert tracker.mp_drawing.calls[0] == (results.multi_hand_landmarks[0], "connections")


def test_draw_landmarks_without_results():
    tracker = tracker_with_results(None)
    image = object()

    assert tracker.draw_landmarks(image) is image
    assert tracker.mp_drawing.calls == []
