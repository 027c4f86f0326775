"""
Camera capture for FingerTap.

Opens the webcam with OpenCV and, by default, moves cap.read() onto a reader
thread. Every captured image is handed out at most once: the controller
timestamps a sample per processed frame, so re-reading a stale image would
add a duplicate point to the distance signal.
"""

import logging
import threading
import time

import cv2 as cv

from fingertap.config import CameraConfig
from fingertap.errors import CaptureError

logger = logging.getLogger(__name__)


class ThreadedCamera:
    """
    Reads a capture device on a daemon thread and hands out each new frame once.
    """

    def __init__(self, cap, frame_timeout=0.5):
        """
        Start the reader thread.

        Args:
            cap: OpenCV VideoCapture (anything with read/release)
            frame_timeout (float): Seconds read() waits for a new frame
        """
        self.cap = cap
        self.frame_timeout = frame_timeout

        self._frame = None
        self._frame_id = 0
        self._delivered_id = 0
        self._running = True
        self._ready = threading.Condition()

        self.capture_fps = 0.0
        "Frames grabbed per second, refreshed once a second."

        self._thread = threading.Thread(target=self._grab_loop, name="camera-reader", daemon=True)
        self._thread.start()
        logger.info("Camera reader thread started")

    def _grab_loop(self):
        window_start = time.monotonic()
        grabbed = 0
        failures = 0

        while self._running:
            ok, image = self.cap.read()
            if not ok:
                failures += 1
                if failures == 1:
                    logger.warning("Camera returned no frame")
                time.sleep(0.01)
                continue
            failures = 0

            with self._ready:
                self._frame = image
                self._frame_id += 1
                self._ready.notify_all()

            grabbed += 1
            now = time.monotonic()
            if now - window_start >= 1.0:
                self.capture_fps = grabbed / (now - window_start)
                grabbed = 0
                window_start = now

    def read(self):
        """
        Wait for a frame newer than the last one returned.

        Returns:
            tuple: (True, image copy), or (False, None) on timeout or after release()
        """
        with self._ready:
            fresh = self._ready.wait_for(
                lambda: not self._running or self._frame_id != self._delivered_id,
                timeout=self.frame_timeout,
            )
            if not fresh or not self._running:
                return False, None

            self._delivered_id = self._frame_id
            return True, self._frame.copy()

    @property
    def is_alive(self):
        return self._thread.is_alive()

    def release(self):
        """Stop the reader thread and release the device."""
        with self._ready:
            self._running = False
            self._ready.notify_all()

        self._thread.join(timeout=1.0)
        self.cap.release()
        logger.info("Camera reader stopped")


def setup_camera(cam_port=0, width=CameraConfig.DEFAULT_WIDTH, height=CameraConfig.DEFAULT_HEIGHT,
                 threaded=CameraConfig.USE_THREADED_CAPTURE):
    """
    Open and configure the camera.

    Args:
        cam_port (int): Camera port number
        width (int): Requested capture width
        height (int): Requested capture height
        threaded (bool): Wrap the capture in a ThreadedCamera

    Returns:
        cv.VideoCapture or ThreadedCamera: Configured capture object

    Raises:
        CaptureError: If the camera cannot be opened
    """
    backend_args = () if CameraConfig.BACKEND is None else (CameraConfig.BACKEND,)
    cap = cv.VideoCapture(cam_port, *backend_args)

    if not cap.isOpened():
        cap.release()
        raise CaptureError(f"Camera on port {cam_port} could not be opened")

    # buffer size goes first, some backends ignore it once streaming
    requested = (
        (cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE),
        (cv.CAP_PROP_FPS, CameraConfig.TARGET_FPS),
        (cv.CAP_PROP_FRAME_WIDTH, width),
        (cv.CAP_PROP_FRAME_HEIGHT, height),
    )
    for prop, value in requested:
        cap.set(prop, value)

    logger.info(
        f"Camera {cam_port} opened at {cap.get(cv.CAP_PROP_FRAME_WIDTH):.0f}x"
        f"{cap.get(cv.CAP_PROP_FRAME_HEIGHT):.0f}, {cap.get(cv.CAP_PROP_FPS):.1f} fps "
        f"(requested {width}x{height})"
    )

    return ThreadedCamera(cap) if threaded else cap
