from .aggregator import (
    TrialMetrics,
    amplitude_decrement,
    compute_metrics,
    frequency,
    inter_tap_intervals,
    interval_amplitudes,
    rhythm_variability,
)

__all__ = [
    "TrialMetrics",
    "amplitude_decrement",
    "compute_metrics",
    "frequency",
    "inter_tap_intervals",
    "interval_amplitudes",
    "rhythm_variability",
]
