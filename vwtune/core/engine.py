from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from .point import Point


@dataclass
class TrialResult:
    trial_index: int
    point: Point
    loss: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SearchResult:
    best_point: Point | None
    best_loss: float | None
    trials: List[TrialResult] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def n_failed(self) -> int:
        return sum(1 for t in self.trials if not t.ok)

    @property
    def losses(self) -> List[float]:
        """Losses of successful trials, in trial order."""
        return [t.loss for t in self.trials if t.ok]


@dataclass
class SearchState:
    trial_count: int = 0
    elapsed: float = 0.0

    best_point: Point | None = None
    best_loss: float | None = None
    best_trial: int | None = None

    trials: List[TrialResult] = field(default_factory=list)

    stop_search: bool = False

    def record(self, result: TrialResult) -> bool:
        """Append a finished trial; return True when it becomes the new best."""
        self.trials.append(result)
        self.trial_count += 1
        if not result.ok or result.loss is None or not math.isfinite(result.loss):
            return False
        if self.best_loss is None or result.loss < self.best_loss:
            self.best_loss = result.loss
            self.best_point = result.point
            self.best_trial = result.trial_index
            return True
        return False

    def to_result(self) -> SearchResult:
        return SearchResult(
            best_point=self.best_point,
            best_loss=self.best_loss,
            trials=list(self.trials),
            elapsed=self.elapsed,
        )
