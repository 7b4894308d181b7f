from datetime import timedelta

import pytest

from vwtune import (
    ConfigurationError,
    StopStrategy,
    stop_after_max_duration,
    stop_after_max_trials,
    stop_after_max_trials_or_duration,
)


def test_max_trials_boundary():
    stop = stop_after_max_trials(5)
    assert not stop.should_stop(4, 1e9)
    assert stop.should_stop(5, 0.0)
    assert stop.remaining_trials(3) == 2
    assert stop.remaining_trials(7) == 0


def test_max_duration_accepts_seconds_and_timedelta():
    assert stop_after_max_duration(60).max_duration == 60.0
    stop = stop_after_max_duration(timedelta(minutes=2))
    assert stop.max_duration == 120.0
    assert not stop.should_stop(10_000, 119.9)
    assert stop.should_stop(0, 120.0)
    assert stop.remaining_trials(10) is None


def test_combined_limits_are_or():
    stop = stop_after_max_trials_or_duration(10, 30.0)
    assert stop.should_stop(10, 0.0)
    assert stop.should_stop(0, 30.0)
    assert not stop.should_stop(9, 29.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"max_trials": 0},
        {"max_trials": 2.5},
        {"max_trials": True},
        {"max_duration": 0},
        {"max_duration": timedelta(seconds=-1)},
    ],
)
def test_invalid_limits(kwargs):
    with pytest.raises(ConfigurationError):
        StopStrategy(**kwargs)
