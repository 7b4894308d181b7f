from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .engine import SearchState, TrialResult


class SearchCallback:
    def on_search_begin(self, state: SearchState) -> None: ...
    def on_batch_begin(self, state: SearchState, trial_indices: List[int]) -> None: ...
    def on_trial_end(self, state: SearchState, result: TrialResult) -> None: ...
    def on_batch_end(self, state: SearchState) -> None: ...
    def on_search_end(self, state: SearchState) -> None: ...


@dataclass
class HistoryCallback(SearchCallback):
    history: Dict[str, Any] = field(
        default_factory=lambda: {
            "trial": [],
            "loss": [],
            "best_loss": [],
            "elapsed": [],
            "failed": [],
        }
    )

    def on_trial_end(self, state: SearchState, result: TrialResult) -> None:
        h = self.history
        h["trial"].append(result.trial_index)
        h["loss"].append(result.loss if result.ok else None)
        h["best_loss"].append(state.best_loss)
        h["elapsed"].append(state.elapsed)
        if not result.ok:
            h["failed"].append(result.trial_index)


@dataclass
class NoImprovementStopping(SearchCallback):
    """Stop once ``patience`` consecutive trials fail to beat the best by ``min_delta``."""

    patience: int = 10
    min_delta: float = 0.0

    best: float | None = None
    wait: int = 0
    stopped_trial: int | None = None

    def on_trial_end(self, state: SearchState, result: TrialResult) -> None:
        current = result.loss if result.ok else None
        if current is not None and (self.best is None or current < self.best - self.min_delta):
            self.best = current
            self.wait = 0
            return
        self.wait += 1
        if self.wait >= self.patience:
            self.stopped_trial = result.trial_index
            state.stop_search = True


class CallbackList(SearchCallback):
    def __init__(self, callbacks: List[SearchCallback] | None = None):
        self.callbacks = callbacks or []

    def append(self, cb: SearchCallback) -> None:
        self.callbacks.append(cb)

    def on_search_begin(self, state: SearchState) -> None:
        for cb in self.callbacks:
            cb.on_search_begin(state)

    def on_batch_begin(self, state: SearchState, trial_indices: List[int]) -> None:
        for cb in self.callbacks:
            cb.on_batch_begin(state, trial_indices)

    def on_trial_end(self, state: SearchState, result: TrialResult) -> None:
        for cb in self.callbacks:
            cb.on_trial_end(state, result)

    def on_batch_end(self, state: SearchState) -> None:
        for cb in self.callbacks:
            cb.on_batch_end(state)

    def on_search_end(self, state: SearchState) -> None:
        for cb in self.callbacks:
            cb.on_search_end(state)
