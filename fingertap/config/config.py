"""
Configuration module for FingerTap.

This module contains all configuration parameters and constants used by the
assessment engine and its camera/tracker boundary. Default values live in the
grouped constant classes below; `AssessmentConfig` is the per-session instance
that the trial controller and the CLI read from.

TUNING:
- Lower MIN_PEAK_DISTANCE_MS to resolve very fast tappers (at the cost of more jitter taps)
- Raise CLOSED_THRESHOLD if slow, low-amplitude taps are being missed
- Use 640x480 capture for best tracker FPS on slow machines
"""

import argparse
from typing import Any, Dict


# ==================== Trial Configuration ====================
class TrialDefaults:
    """Trial lifecycle parameters."""

    # Length of one trial before auto-stop (milliseconds)
    TRIAL_DURATION_MS = 10000

    # Minimum number of accepted taps for a valid trial
    MIN_REQUIRED_TAPS = 15

    # Hand-loss and inactivity limits (milliseconds).
    # Carried for boundary consumers, not enforced by the controller.
    MAX_HAND_LOSS_TIME_MS = 3000
    MAX_INACTIVITY_TIME_MS = 5000


# ==================== Tap Detection Configuration ====================
class TapDetectionConfig:
    """
    Configuration for the signal pipeline and the dual-method tap detector.

    The distance signal is the thumb-index distance expressed as a percentage
    of the hand size, so all thresholds below are in percent of hand size.
    """

    # Centered moving-average window (samples)
    SMOOTHING_WINDOW = 3

    # Minimum spacing between two accepted taps (milliseconds)
    MIN_PEAK_DISTANCE_MS = 30

    # Distance below which fingers count as "closed" (local-minimum method)
    CLOSED_THRESHOLD = 30.0

    # Distance above which fingers count as "open" (unused by the detector)
    OPEN_THRESHOLD = 35.0

    # Per-sample drop that marks a closing motion (rate-of-change method)
    CLOSING_VELOCITY_THRESHOLD = -3.0

    # Hand sizes at or below this (pixels) are treated as degenerate tracking.
    # A real hand spans tens of pixels even at 320x240.
    MIN_HAND_SIZE_PX = 1.0

    # Depth axis weight relative to image width in the 3D finger distance
    DEPTH_SCALE = 0.5


# ==================== MediaPipe Hand Detection Configuration ====================
class MediaPipeConfig:
    """Configuration for MediaPipe hand tracking."""

    MODEL_COMPLEXITY = 1
    MIN_DETECTION_CONFIDENCE = 0.7
    MIN_TRACKING_CONFIDENCE = 0.7
    MAX_NUM_HANDS = 1


# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    # Requested capture resolution (actual may vary by camera capability)
    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 720

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    # Target FPS for camera
    TARGET_FPS = 30

    # Read frames on a background thread
    USE_THREADED_CAPTURE = True

    # Camera backend (None lets OpenCV choose)
    BACKEND = None


# ==================== UI Configuration ====================
class UIConfig:
    """Configuration for the overlay window."""

    WINDOW_NAME = "FingerTap"

    # Colors (BGR format)
    COLOR_WHITE = (255, 255, 255)
    COLOR_GREEN = (0, 255, 0)
    COLOR_YELLOW = (0, 255, 255)
    COLOR_RED = (0, 0, 255)
    COLOR_CYAN = (255, 255, 0)

    # Fingertip marker radius (pixels)
    TIP_RADIUS = 10

    # Text display
    FONT_SCALE = 0.6
    FONT_THICKNESS = 2


class AssessmentConfig:
    """
    Configuration of one assessment session.
    Every attribute defaults to the matching constant above and can be
    overridden with keyword options, like the options object the controller
    is created with.
    """

    def __init__(self, **options: Any) -> None:
        """
        Initialize configuration attributes with default values, then apply `options`.
        """

        self.trial_duration_ms: int = TrialDefaults.TRIAL_DURATION_MS
        "Trial length before the auto-stop timer fires. Defaults to 10 seconds."
        self.min_required_taps: int = TrialDefaults.MIN_REQUIRED_TAPS
        "Taps needed for a successful trial. Defaults to 15."

        self.smoothing_window: int = TapDetectionConfig.SMOOTHING_WINDOW
        "Moving average window size in samples. Defaults to 3."
        self.min_peak_distance_ms: int = TapDetectionConfig.MIN_PEAK_DISTANCE_MS
        "Minimum milliseconds between two accepted taps. Defaults to 30."
        self.closed_threshold: float = TapDetectionConfig.CLOSED_THRESHOLD
        "Normalized distance below which the fingers are closed. Defaults to 30."
        self.open_threshold: float = TapDetectionConfig.OPEN_THRESHOLD
        "Normalized distance above which the fingers are open. Not used by the detector."

        self.max_hand_loss_time_ms: int = TrialDefaults.MAX_HAND_LOSS_TIME_MS
        "Maximum time without a hand. Not enforced by the controller."
        self.max_inactivity_time_ms: int = TrialDefaults.MAX_INACTIVITY_TIME_MS
        "Maximum time without tapping. Not enforced by the controller."

        self.video_width: int = CameraConfig.DEFAULT_WIDTH
        "Requested capture width in pixels."
        self.video_height: int = CameraConfig.DEFAULT_HEIGHT
        "Requested capture height in pixels."

        self.model_complexity: int = MediaPipeConfig.MODEL_COMPLEXITY
        "MediaPipe hand model complexity (0 or 1)."
        self.min_detection_confidence: float = MediaPipeConfig.MIN_DETECTION_CONFIDENCE
        "MediaPipe detection threshold."
        self.min_tracking_confidence: float = MediaPipeConfig.MIN_TRACKING_CONFIDENCE
        "MediaPipe tracking threshold."

        for key, value in options.items():
            if not hasattr(self, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

        if self.smoothing_window < 1:
            raise ValueError("smoothing_window must be at least 1")
        if self.trial_duration_ms <= 0:
            raise ValueError("trial_duration_ms must be positive")

    def with_overrides(self, **options: Any) -> "AssessmentConfig":
        """
        Return a new configuration with the given options applied on top of this one.
        """
        merged = self.as_dict()
        merged.update(options)
        return AssessmentConfig(**merged)

    def as_dict(self) -> Dict[str, Any]:
        """
        Return all configuration attributes as a plain dictionary.
        """
        return dict(vars(self))

    def load_args(self, args: argparse.Namespace) -> None:
        """
        Load configuration attributes from the command line arguments.
        """
        if args.duration is not None:
            self.trial_duration_ms = int(args.duration * 1000)
        if args.min_taps is not None:
            self.min_required_taps = args.min_taps
        self.video_width = args.width
        self.video_height = args.height

    def __repr__(self) -> str:
        return f"AssessmentConfig({self.as_dict()})"


config = AssessmentConfig()
"Default configuration instance."
