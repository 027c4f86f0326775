"""
MediaPipe-based hand tracking for FingerTap.

Wraps MediaPipe Hands and turns each camera image into a LandmarkFrame for
the trial controller, or None when no hand is visible. Only the first
detected hand is used; the assessment is single-handed.
"""

import logging
from typing import Any, Optional

import cv2 as cv

from fingertap.config import MediaPipeConfig
from fingertap.errors import TrackerUnavailableError
from fingertap.utils import LandmarkFrame

logger = logging.getLogger(__name__)


def handedness_label(results, hand_index=0):
    """
    Return the handedness label ('Left' / 'Right') of a detected hand, or None.

    Args:
        results: MediaPipe Hands results
        hand_index (int): Index of the hand in the results
    """
    multi_handedness = getattr(results, "multi_handedness", None)
    if not multi_handedness or len(multi_handedness) <= hand_index:
        return None
    return multi_handedness[hand_index].classification[0].label


def frame_from_results(results, image_width, image_height):
    """
    Convert MediaPipe Hands results into a LandmarkFrame.

    Args:
        results: MediaPipe Hands results (anything with `multi_hand_landmarks`)
        image_width (int): Width in pixels of the processed image
        image_height (int): Height in pixels of the processed image

    Returns:
        LandmarkFrame or None: The first hand, or None if no hand was found
    """
    if not results.multi_hand_landmarks:
        return None

    hand_landmarks = results.multi_hand_landmarks[0]
    return LandmarkFrame.from_landmarks(
        hand_landmarks.landmark,
        image_width,
        image_height,
        handedness=handedness_label(results, 0),
    )


class HandTracker:
    """
    Single-hand MediaPipe tracker.
    """

    def __init__(self, config=None):
        """
        Initialize MediaPipe Hands.

        Args:
            config (AssessmentConfig, optional): Tracker confidences and model complexity.
                MediaPipeConfig defaults are used when omitted.

        Raises:
            TrackerUnavailableError: If MediaPipe cannot be loaded
        """
        model_complexity = getattr(config, "model_complexity", MediaPipeConfig.MODEL_COMPLEXITY)
        min_detection = getattr(
            config, "min_detection_confidence", MediaPipeConfig.MIN_DETECTION_CONFIDENCE
        )
        min_tracking = getattr(
            config, "min_tracking_confidence", MediaPipeConfig.MIN_TRACKING_CONFIDENCE
        )

        try:
            import mediapipe as mp

            self.mp_hands = mp.solutions.hands
            self.mp_drawing = mp.solutions.drawing_utils
            self.mp_drawing_styles = mp.solutions.drawing_styles
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                model_complexity=model_complexity,
                min_detection_confidence=min_detection,
                min_tracking_confidence=min_tracking,
                max_num_hands=MediaPipeConfig.MAX_NUM_HANDS,
            )
        except (ImportError, AttributeError, RuntimeError) as e:
            raise TrackerUnavailableError(f"MediaPipe Hands could not be loaded: {e}") from e

        self.last_results: Optional[Any] = None
        "Raw results of the last processed image, for drawing."

        logger.info(
            f"Initialized MediaPipe hand tracker (complexity={model_complexity}, "
            f"detection={min_detection}, tracking={min_tracking})"
        )

    def process(self, image):
        """
        Detect a hand in a BGR image.

        Args:
            image (numpy.ndarray): BGR frame from the camera

        Returns:
            LandmarkFrame or None: The tracked hand, or None if no hand is visible
        """
        height, width = image.shape[:2]

        rgb = cv.cvtColor(image, cv.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        results = self.hands.process(rgb)

        self.last_results = results
        return frame_from_results(results, width, height)

    def draw_landmarks(self, image):
        """
        Draw the full skeleton of the last detected hand on `image`.
        """
        if self.last_results is None or not self.last_results.multi_hand_landmarks:
            return image

        for hand_landmarks in self.last_results.multi_hand_landmarks:
            self.mp_drawing.draw_landmarks(
                image,
                hand_landmarks,
                self.mp_hands.HAND_CONNECTIONS,
                self.mp_drawing_styles.get_default_hand_landmarks_style(),
                self.mp_drawing_styles.get_default_hand_connections_style(),
            )
        return image

    def close(self):
        """Release the MediaPipe graph."""
        self.hands.close()
        logger.info("Hand tracker closed")
