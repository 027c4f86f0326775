"""
Assessment session for FingerTap.

Wires the camera, the hand tracker and the trial controller together. The
session owns the external collaborators: when one of them cannot be set up,
`init()` reports the failure and the session stays unusable, while the
controller itself never depends on them.

USAGE:
    session = AssessmentSession(AssessmentConfig(), camera_port=0)
    if session.init().success:
        session.start_trial("right")
        while session.controller.is_recording:
            session.step()
        session.destroy()
"""

import logging
from typing import Callable, Optional, Tuple

from fingertap.capture import setup_camera
from fingertap.config import AssessmentConfig, config as default_config
from fingertap.core import (
    EventType,
    OperationResult,
    TrialController,
    TrialEvent,
)
from fingertap.errors import FingerTapError
from fingertap.tracking import HandTracker
from fingertap.ui import draw_hand_overlay, draw_status_overlay, new_fps_state
from fingertap.utils import LandmarkFrame

logger = logging.getLogger(__name__)

NOT_INITIALIZED = "Session not initialized. Call init() first."


class AssessmentSession:
    """
    A live assessment session: camera in, trial events and results out.
    """

    def __init__(
        self,
        config: Optional[AssessmentConfig] = None,
        camera_port: int = 0,
        camera_factory: Optional[Callable[[], object]] = None,
        tracker_factory: Optional[Callable[[], object]] = None,
        controller: Optional[TrialController] = None,
    ) -> None:
        """
        :param config: Assessment options. Defaults to the module-level configuration.
        :param camera_port: Camera port opened by the default camera factory.
        :param camera_factory: Returns an object with `read()` and `release()`.
        :param tracker_factory: Returns an object with `process(image)`, `draw_landmarks(image)` and `close()`.
        :param controller: Trial controller to drive. A new one is built from `config` when omitted.
        """
        self.config = config if config is not None else default_config
        self.camera_port = camera_port

        self._camera_factory = camera_factory or (
            lambda: setup_camera(
                self.camera_port, self.config.video_width, self.config.video_height
            )
        )
        self._tracker_factory = tracker_factory or (lambda: HandTracker(self.config))

        self.controller = controller if controller is not None else TrialController(self.config)
        self.camera = None
        self.tracker = None
        self.initialized = False

        self.fps_state = new_fps_state()

    def subscribe(self, listener: Callable[[TrialEvent], None]) -> None:
        """
        Register a callback for trial events and session events.
        """
        self.controller.subscribe(listener)

    def init(self) -> OperationResult:
        """
        Set up the tracker and the camera.
        Failures are emitted as ERROR events and returned, not raised.
        """
        if self.initialized:
            return OperationResult(True)

        try:
            self.tracker = self._tracker_factory()
            self.camera = self._camera_factory()
        except FingerTapError as e:
            logger.error(f"Session initialization failed: {e}")
            self.controller.emit([TrialEvent(EventType.ERROR, str(e))])
            self._release()
            return OperationResult(False, str(e))

        self.initialized = True
        logger.info("Assessment session initialized")
        self.controller.emit([TrialEvent(EventType.INITIALIZED)])
        return OperationResult(True)

    def start_trial(self, hand: str = "right") -> OperationResult:
        if not self.initialized:
            logger.warning(NOT_INITIALIZED)
            return OperationResult(False, NOT_INITIALIZED)
        return self.controller.start(hand)

    def stop_trial(self) -> OperationResult:
        return self.controller.stop()

    def step(self, draw: bool = True) -> Optional[Tuple[object, Optional[LandmarkFrame]]]:
        """
        Read one camera frame, track the hand and feed the controller.

        :param draw: Draw the hand skeleton, fingertip and status overlays on the image.
        :return: `(image, frame)`, or None when no camera image was available.
        """
        if not self.initialized:
            return None

        ret, image = self.camera.read()
        if not ret or image is None:
            logger.debug("No camera frame available")
            return None

        frame = self.tracker.process(image)
        self.controller.process_frame(frame)

        if draw:
            if frame is not None:
                self.tracker.draw_landmarks(image)
                draw_hand_overlay(image, frame)
            self.fps_state = draw_status_overlay(
                image,
                self.controller.state,
                self.controller.elapsed_ms(),
                len(self.controller.tap_events),
                self.fps_state,
                hand_visible=frame is not None,
                camera_fps=getattr(self.camera, "capture_fps", 0.0),
            )

        return image, frame

    def destroy(self) -> None:
        """
        Stop everything. A running trial is discarded without a result.
        """
        self.controller.destroy()
        self._release()
        self.initialized = False
        logger.info("Assessment session destroyed")

    def _release(self) -> None:
        if self.tracker is not None:
            self.tracker.close()
            self.tracker = None
        if self.camera is not None:
            self.camera.release()
            self.camera = None
