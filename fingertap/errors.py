"""
Exception types raised by FingerTap.

Precondition violations on the trial lifecycle are not exceptions: they are
returned as failed `OperationResult` values by the controller.
"""


class FingerTapError(Exception):
    """Base class for all FingerTap errors."""


class DegenerateHandError(FingerTapError):
    """
    The hand-size reference of a frame is (close to) zero, so the
    normalized distance is undefined. Callers skip the frame.
    """

    def __init__(self, hand_size: float) -> None:
        super().__init__(f"Degenerate hand size: {hand_size:.3g} px")
        self.hand_size = hand_size


class TrackerUnavailableError(FingerTapError):
    """The hand tracking model could not be loaded or initialized."""


class CaptureError(FingerTapError):
    """The capture device could not be opened or stopped delivering frames."""
