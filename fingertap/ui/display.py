"""
UI Display Module - Overlay drawing for the assessment window.

Draws the thumb-index line, the fingertip markers and the trial status on
camera frames. Nothing here feeds back into the measurement.
"""

import time
import logging

import cv2 as cv

from fingertap.config import UIConfig
from fingertap.core import TrialState

logger = logging.getLogger(__name__)


def new_fps_state():
    """
    Create the FPS tracking state used by draw_status_overlay.

    Returns:
        dict: keys 'display_count', 'start_time', 'display_fps'
    """
    return {'display_count': 0, 'start_time': time.time(), 'display_fps': 0.0}


def draw_hand_overlay(display_img, frame):
    """
    Draw the thumb-index line and the two fingertip dots.

    Args:
        display_img (numpy.ndarray): BGR image to draw on
        frame (LandmarkFrame): Tracked hand, in the coordinates of `display_img`

    Returns:
        numpy.ndarray: The same image
    """
    h, w = display_img.shape[:2]
    thumb = frame.thumb_tip.to_pixels(w, h)
    index = frame.index_tip.to_pixels(w, h)

    cv.line(display_img, thumb, index, UIConfig.COLOR_WHITE, 2)
    for tip in (thumb, index):
        cv.circle(display_img, tip, UIConfig.TIP_RADIUS, UIConfig.COLOR_WHITE, -1)

    return display_img


def draw_status_overlay(display_img, state, elapsed_ms, tap_count, fps_state, hand_visible=True,
                        camera_fps=0.0):
    """
    Draw trial status and FPS on the display image.

    Args:
        display_img (numpy.ndarray): BGR image to draw on
        state (TrialState): Current controller state
        elapsed_ms (int): Milliseconds since trial start
        tap_count (int): Taps detected so far
        fps_state (dict): FPS tracking state from new_fps_state()
        hand_visible (bool): Whether the tracker found a hand in this frame
        camera_fps (float): Capture rate of the camera reader, 0 when unknown

    Returns:
        dict: Updated fps_state
    """
    color = UIConfig.COLOR_RED if state == TrialState.RECORDING else UIConfig.COLOR_GREEN
    cv.putText(display_img, f"State: {state}", (10, 30),
               cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
               color, UIConfig.FONT_THICKNESS)

    if state == TrialState.RECORDING:
        cv.putText(display_img, f"Time: {elapsed_ms / 1000:.1f}s  Taps: {tap_count}", (10, 60),
                   cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                   UIConfig.COLOR_YELLOW, UIConfig.FONT_THICKNESS)

    if not hand_visible:
        cv.putText(display_img, "Hand not detected", (10, 90),
                   cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                   UIConfig.COLOR_RED, UIConfig.FONT_THICKNESS)

    # FPS counter, updated once per second
    current_time = time.time()
    fps_state['display_count'] += 1
    elapsed = current_time - fps_state['start_time']

    if elapsed >= 1.0:
        fps_state['display_fps'] = fps_state['display_count'] / elapsed
        fps_state['display_count'] = 0
        fps_state['start_time'] = current_time

    if fps_state['display_fps'] > 0:
        cv.putText(display_img, f"Processing: {fps_state['display_fps']:.1f} FPS", (10, 120),
                   cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                   UIConfig.COLOR_CYAN, UIConfig.FONT_THICKNESS)

    if camera_fps > 0:
        cv.putText(display_img, f"Camera: {camera_fps:.1f} FPS", (10, 150),
                   cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                   UIConfig.COLOR_GREEN, UIConfig.FONT_THICKNESS)

    return fps_state
