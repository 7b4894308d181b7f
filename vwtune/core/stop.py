from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from ..errors import ConfigurationError


def _seconds(duration: float | timedelta) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


@dataclass(frozen=True)
class StopStrategy:
    """Stop after ``max_trials`` completed trials, ``max_duration`` seconds, or either."""

    max_trials: int | None = None
    max_duration: float | None = None

    def __post_init__(self) -> None:
        if self.max_trials is None and self.max_duration is None:
            raise ConfigurationError("StopStrategy needs max_trials, max_duration or both")
        if self.max_trials is not None and (
            isinstance(self.max_trials, bool) or int(self.max_trials) != self.max_trials or self.max_trials < 1
        ):
            raise ConfigurationError(f"max_trials must be a positive integer, got {self.max_trials!r}")
        if self.max_duration is not None:
            seconds = _seconds(self.max_duration)
            if seconds <= 0:
                raise ConfigurationError(f"max_duration must be positive, got {self.max_duration!r}")
            object.__setattr__(self, "max_duration", seconds)

    def should_stop(self, trial_count: int, elapsed: float) -> bool:
        if self.max_trials is not None and trial_count >= self.max_trials:
            return True
        if self.max_duration is not None and elapsed >= self.max_duration:
            return True
        return False

    def remaining_trials(self, trial_count: int) -> int | None:
        """Trials left before the trial limit, or None when only time is limited."""
        if self.max_trials is None:
            return None
        return max(self.max_trials - trial_count, 0)


def stop_after_max_trials(max_trials: int) -> StopStrategy:
    return StopStrategy(max_trials=max_trials)


def stop_after_max_duration(max_duration: float | timedelta) -> StopStrategy:
    return StopStrategy(max_duration=max_duration)


def stop_after_max_trials_or_duration(
    max_trials: int, max_duration: float | timedelta
) -> StopStrategy:
    return StopStrategy(max_trials=max_trials, max_duration=max_duration)
