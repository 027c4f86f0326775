"""
Tests for camera setup and the threaded reader.
"""

import logging
import threading
import time

import numpy as np
import pytest

from fingertap.capture import ThreadedCamera, setup_camera
from fingertap.capture import camera as camera_module
from fingertap.errors import CaptureError

logger = logging.getLogger(__name__)


class FakeCapture:
    """
    VideoCapture stand-in. Produces `frames` numbered images, then fails.
    """

    def __init__(self, frames=None, opened=True):
        self.remaining = frames
        self.opened = opened
        self.count = 0
        self.released = False
        self.props = {}
        self.lock = threading.Lock()

    def read(self):
        with self.lock:
            if self.remaining is not None:
                if self.remaining == 0:
                    return False, None
                self.remaining -= 1
            self.count += 1
            return True, np.full((4, 4, 3), self.count % 255, dtype=np.uint8)

    def isOpened(self):
        return self.opened

    def release(self):
        self.released = True

    def set(self, prop, value):
        self.props[prop] = value

    def get(self, prop):
        return self.props.get(prop, 0.0)


def test_threaded_camera_reads_frames():
    cap = FakeCapture()
    camera = ThreadedCamera(cap, frame_timeout=2.0)

    ret, frame = camera.read()
    camera.release()

    assert ret
    assert frame.shape == (4, 4, 3)
    assert cap.released
    assert not camera.is_alive


def test_each_frame_returned_once():
    """After the only frame has been read, the next read times out."""
    camera = ThreadedCamera(FakeCapture(frames=1), frame_timeout=0.2)

    first = camera.read()
    second = camera.read()
    camera.release()

    assert first[0]
    assert second == (False, None)


def test_read_after_release():
    camera = ThreadedCamera(FakeCapture(), frame_timeout=2.0)
    camera.release()

    assert camera.read() == (False, None)


def test_setup_camera_unopened(monkeypatch):
    cap = FakeCapture(opened=False)
    monkeypatch.setattr(camera_module.cv, "VideoCapture", lambda *args: cap)

    with pytest.raises(CaptureError):
        setup_camera(3)

    assert cap.released


def test_setup_camera_configures_capture(monkeypatch):
    cap = FakeCapture()
    monkeypatch.setattr(camera_module.cv, "VideoCapture", lambda *args: cap)

    result = setup_camera(0, 640, 480, threaded=False)

    assert result is cap
    assert cap.props[camera_module.cv.CAP_PROP_FRAME_WIDTH] == 640
    assert cap.props[camera_module.cv.CAP_PROP_FRAME_HEIGHT] == 480
    assert cap.props[camera_module.cv.CAP_PROP_BUFFERSIZE] == 1


def test_capture_fps_measured():
    camera = ThreadedCamera(FakeCapture(), frame_timeout=2.0)
    time.sleep(1.3)
    fps = camera.capture_fps
    camera.release()

    assert fps > 0
