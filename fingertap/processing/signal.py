"""
Signal processing helpers: centered moving-average smoothing and finite
difference velocity.

Both functions are recomputed over the whole trial on every frame. Trials
last seconds, so the buffer stays small.
"""

from typing import List, Sequence

import numpy as np


def moving_average(values: Sequence[float], window: int = 3) -> List[float]:
    """
    Centered moving average with a window that shrinks at the edges.

    Sample `i` is the mean of `values[i - window // 2 : i + window // 2 + 1]`
    clipped to the signal bounds, so the output always has the same length as
    the input and no padding is invented.

    :param values: The signal to smooth.
    :param window: Window size in samples, at least 1.
    """
    if window < 1:
        raise ValueError(f"Smoothing window must be at least 1, got {window}")

    data = np.asarray(values, dtype=float)
    n = data.size
    if n == 0:
        return []

    half = window // 2
    cumsum = np.concatenate(([0.0], np.cumsum(data)))

    idx = np.arange(n)
    start = np.maximum(0, idx - half)
    end = np.minimum(n, idx + half + 1)

    smoothed = (cumsum[end] - cumsum[start]) / (end - start)
    return smoothed.tolist()


def velocity(values: Sequence[float], times_ms: Sequence[int]) -> List[float]:
    """
    Finite difference derivative of a signal, in units per second.

    Returns one value per consecutive pair, so the result is one element
    shorter than the input. Pairs with no elapsed time give 0.

    :param values: The (smoothed) signal.
    :param times_ms: Sample times in milliseconds, aligned with `values`.
    """
    if len(values) != len(times_ms):
        raise ValueError(
            f"Signal and time vectors differ in length ({len(values)} != {len(times_ms)})"
        )
    if len(values) < 2:
        return []

    dy = np.diff(np.asarray(values, dtype=float))
    dt = np.diff(np.asarray(times_ms, dtype=float)) / 1000.0

    out = np.zeros_like(dy)
    np.divide(dy, dt, out=out, where=dt != 0)
    return out.tolist()
