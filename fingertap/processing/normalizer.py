"""
Frame normalization for FingerTap.

Turns one tracked hand into a single scale-invariant number: the thumb-index
distance expressed as a percentage of the hand size. Using the wrist to
middle-knuckle length as reference makes the signal independent of how far
the hand is from the camera.
"""

from dataclasses import dataclass

from fingertap.config import TapDetectionConfig
from fingertap.errors import DegenerateHandError
from fingertap.utils import LandmarkFrame


@dataclass(frozen=True)
class NormalizedSample:
    """
    Result of normalizing one frame.
    """

    distance: float
    """Thumb-index distance as a percentage of the hand size."""

    hand_size: float
    """Planar wrist to middle-MCP distance in pixels."""

    finger_distance: float
    """3D thumb-index distance in pixels."""


def hand_size_px(frame: LandmarkFrame) -> float:
    """
    Planar distance in pixels between the wrist and the middle finger MCP.
    """
    return frame.wrist.planar_distance_px(
        frame.middle_mcp, frame.image_width, frame.image_height
    )


def finger_distance_px(
    frame: LandmarkFrame, depth_scale: float = TapDetectionConfig.DEPTH_SCALE
) -> float:
    """
    3D distance in pixels between the thumb tip and the index tip.
    Depth is weighted by `depth_scale` times the image width, since monocular
    depth estimates are noisier than the planar ones.
    """
    return frame.thumb_tip.distance_px(
        frame.index_tip, frame.image_width, frame.image_height, depth_scale
    )


def normalize_frame(
    frame: LandmarkFrame,
    min_hand_size: float = TapDetectionConfig.MIN_HAND_SIZE_PX,
    depth_scale: float = TapDetectionConfig.DEPTH_SCALE,
) -> NormalizedSample:
    """
    Normalize a landmark frame into a distance sample.

    Args:
        frame (LandmarkFrame): Tracked hand keypoints and image size
        min_hand_size (float): Hand sizes at or below this are degenerate
        depth_scale (float): Depth weight relative to the image width

    Returns:
        NormalizedSample: `(finger_distance / hand_size) * 100` and its inputs

    Raises:
        DegenerateHandError: If the hand size is too small to normalize by
    """
    hand_size = hand_size_px(frame)
    if hand_size <= min_hand_size:
        raise DegenerateHandError(hand_size)

    finger_distance = finger_distance_px(frame, depth_scale)
    distance = (finger_distance / hand_size) * 100

    return NormalizedSample(
        distance=distance, hand_size=hand_size, finger_distance=finger_distance
    )
