"""
Random search driver.

The driver is single threaded control logic. Each iteration it asks the
stop strategy whether to continue, draws the next batch of points from
the space (one index-seeded point per trial, so the sequence does not
depend on which worker finishes first), hands the batch to a backend and
blocks until every trial in it has returned. Results are reduced in
trial order with a strict less-than, so ties keep the earlier point.
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from typing import Any, Callable, List

from ..errors import ConfigurationError, NoValidResultError
from .backends import Backend, Outcome, SerialBackend
from .callbacks import CallbackList, SearchCallback
from .engine import SearchResult, SearchState, TrialResult
from .point import Point
from .space import RandomSpace
from .stop import StopStrategy

logger = logging.getLogger(__name__)

Objective = Callable[[Point], float]


def _describe(error: BaseException) -> str:
    return f"{type(error).__name__}: {error}"


def _check_loss(value: Any, point: Point) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(
            f"Objective must return a real number, got {type(value).__name__} for {point!r}"
        )
    return float(value)


class RandomSearch:
    def __init__(
        self,
        backend: Backend | None = None,
        trial_batch_size: int = 1,
        callbacks: List[SearchCallback] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if isinstance(trial_batch_size, bool) or int(trial_batch_size) != trial_batch_size or trial_batch_size < 1:
            raise ConfigurationError(f"trial_batch_size must be a positive integer, got {trial_batch_size!r}")
        self.backend = backend or SerialBackend()
        self.trial_batch_size = int(trial_batch_size)
        self.callbacks = CallbackList(list(callbacks or []))
        self._clock = clock

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def minimize(
        self,
        objective: Objective,
        space: RandomSpace,
        stop_strategy: StopStrategy,
    ) -> SearchResult:
        if not callable(objective):
            raise ConfigurationError(f"Objective must be callable, got {type(objective).__name__}")

        state = SearchState()
        start = self._clock()
        self.callbacks.on_search_begin(state)
        logger.info(
            f"Starting random search over {space.names or 'an empty space'} "
            f"(seed={space.seed}, batch size={self.trial_batch_size})"
        )

        while not state.stop_search and not stop_strategy.should_stop(state.trial_count, state.elapsed):
            batch_size = self.trial_batch_size
            remaining = stop_strategy.remaining_trials(state.trial_count)
            if remaining is not None:
                batch_size = min(batch_size, remaining)

            indices = list(range(state.trial_count, state.trial_count + batch_size))
            points = [space.point_for_trial(i) for i in indices]
            self.callbacks.on_batch_begin(state, indices)

            outcomes = self.backend.map(objective, points)

            for index, point, outcome in zip(indices, points, outcomes):
                result = self._to_trial_result(index, point, outcome)
                is_best = state.record(result)
                state.elapsed = self._clock() - start
                self._log_trial(result, is_best)
                self.callbacks.on_trial_end(state, result)

            state.elapsed = self._clock() - start
            self.callbacks.on_batch_end(state)

        self.callbacks.on_search_end(state)
        result = state.to_result()

        if result.best_point is None:
            raise NoValidResultError(
                f"No valid result: all {len(result.trials)} trials failed", result=result
            )

        logger.info(
            f"Search finished after {len(result.trials)} trials "
            f"({result.n_failed} failed, {result.elapsed:.1f}s). "
            f"Best loss {result.best_loss:.6f} at {result.best_point!r}"
        )
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _to_trial_result(self, index: int, point: Point, outcome: Outcome) -> TrialResult:
        if isinstance(outcome.error, ConfigurationError):
            raise outcome.error
        if not outcome.ok:
            return TrialResult(index, point, error=_describe(outcome.error))

        loss = _check_loss(outcome.value, point)
        if not math.isfinite(loss):
            return TrialResult(index, point, error=f"non-finite loss {loss!r}")
        return TrialResult(index, point, loss=loss)

    def _log_trial(self, result: TrialResult, is_best: bool) -> None:
        if not result.ok:
            logger.warning(f"Trial {result.trial_index} failed: {result.error}")
        elif is_best:
            logger.info(f"Trial {result.trial_index}: loss={result.loss:.6f} (new best) {result.point!r}")
        else:
            logger.info(f"Trial {result.trial_index}: loss={result.loss:.6f}")


def minimize(
    objective: Objective,
    space: RandomSpace,
    stop_strategy: StopStrategy,
    backend: Backend | None = None,
    trial_batch_size: int = 1,
    callbacks: List[SearchCallback] | None = None,
) -> SearchResult:
    """Run a random search and return the best point and loss found."""
    search = RandomSearch(backend=backend, trial_batch_size=trial_batch_size, callbacks=callbacks)
    return search.minimize(objective, space, stop_strategy)
