"""
Tests for assessment configuration and command line parsing.
"""

import logging

import pytest

from fingertap.config import AssessmentConfig
from fingertap.config.args_parser import fingertap_parser

logger = logging.getLogger(__name__)


def test_defaults():
    config = AssessmentConfig()

    assert config.trial_duration_ms == 10000
    assert config.min_required_taps == 15
    assert config.smoothing_window == 3
    assert config.min_peak_distance_ms == 30
    assert config.closed_threshold == 30.0
    assert config.open_threshold == 35.0
    assert config.max_hand_loss_time_ms == 3000
    assert config.max_inactivity_time_ms == 5000
    assert (config.video_width, config.video_height) == (1280, 720)


def test_overrides():
    config = AssessmentConfig(trial_duration_ms=5000, closed_threshold=25.0)
    assert config.trial_duration_ms == 5000
    assert config.closed_threshold == 25.0
    assert config.min_required_taps == 15


def test_with_overrides_returns_new_config():
    base = AssessmentConfig(min_required_taps=10)
    derived = base.with_overrides(smoothing_window=5)

    assert derived.smoothing_window == 5
    assert derived.min_required_taps == 10
    assert base.smoothing_window == 3


def test_as_dict():
    data = AssessmentConfig().as_dict()
    assert data["trial_duration_ms"] == 10000
    assert "model_complexity" in data


@pytest.mark.parametrize(
    "options",
    [{"trial_length": 5}, {"smoothing_window": 0}, {"trial_duration_ms": 0}],
)
def test_invalid_options(options):
    with pytest.raises(ValueError):
        AssessmentConfig(**options)


def test_load_args():
    args = fingertap_parser.parse_args(
        ["--duration", "7.5", "--min-taps", "12", "--width", "640", "--height", "480"]
    )
    config = AssessmentConfig()
    config.load_args(args)

    assert config.trial_duration_ms == 7500
    assert config.min_required_taps == 12
    assert (config.video_width, config.video_height) == (640, 480)


def test_load_args_keeps_defaults():
    args = fingertap_parser.parse_args([])
    config = AssessmentConfig()
    config.load_args(args)

    assert config.trial_duration_ms == 10000
    assert config.min_required_taps == 15
    assert args.hand == "right"
    assert not args.headless
