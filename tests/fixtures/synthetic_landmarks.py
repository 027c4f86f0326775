"""
Synthetic hand landmarks and tapping signals for tests.

Frames are laid out so that the normalized thumb-index distance equals a
requested percentage of the hand size: the wrist and middle MCP are stacked
vertically `hand_size_px` pixels apart, the thumb and index tips sit side by
side at the requested pixel distance with no depth difference.
"""

from typing import List, Tuple

from fingertap.utils import LandmarkFrame, Point3D

WIDTH = 640
HEIGHT = 480


def make_frame(distance_pct, hand_size_px=120.0, width=WIDTH, height=HEIGHT, handedness="Right"):
    """
    Build a LandmarkFrame whose normalized distance is `distance_pct`.
    """
    wrist = Point3D(0.5, 0.8, 0.0)
    middle_mcp = Point3D(0.5, 0.8 - hand_size_px / height, 0.0)

    gap_px = distance_pct / 100.0 * hand_size_px
    thumb_tip = Point3D(0.4, 0.4, 0.0)
    index_tip = Point3D(0.4 + gap_px / width, 0.4, 0.0)

    return LandmarkFrame(
        wrist=wrist,
        thumb_tip=thumb_tip,
        index_tip=index_tip,
        middle_mcp=middle_mcp,
        image_width=width,
        image_height=height,
        handedness=handedness,
    )


def make_degenerate_frame():
    """
    A frame whose wrist and middle MCP coincide (zero hand size).
    """
    point = Point3D(0.5, 0.5, 0.0)
    return LandmarkFrame(
        wrist=point,
        thumb_tip=Point3D(0.4, 0.4, 0.0),
        index_tip=Point3D(0.45, 0.4, 0.0),
        middle_mcp=point,
        image_width=WIDTH,
        image_height=HEIGHT,
    )


def spike_taps(n_taps=10, per_period=10, frame_ms=50, open_pct=60.0, closed_pct=20.0, trailing=5):
    """
    Distance samples with one single-sample closure per period.

    Each period is `per_period` samples, `frame_ms` apart: open everywhere
    except the last sample, which is closed. `trailing` open samples follow the last
    tap so it is not at the signal edge.

    Returns:
        tuple: (times_ms, distances)
    """
    distances: List[float] = []
    for _ in range(n_taps):
        distances.extend([open_pct] * (per_period - 1))
        distances.append(closed_pct)
    distances.extend([open_pct] * trailing)

    times = [i * frame_ms for i in range(len(distances))]
    return times, distances


def slow_dip(start=40.0, bottom=22.0, step=2.0) -> Tuple[List[int], List[float]]:
    """
    A V-shaped dip that never drops more than `step` per sample, so only the
    local-minimum method can see it.
    """
    down = []
    value = start
    while value > bottom:
        down.append(value)
        value -= step
    signal = down + [bottom] + list(reversed(down))
    times = [i * 20 for i in range(len(signal))]
    return times, signal
