from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..core.backends import Backend, get_backend
from ..core.sampler import Sampler
from ..core.space import RandomSpace
from ..core.stop import StopStrategy


# ----------------------------------------------------------
# Search driver
# ----------------------------------------------------------
@dataclass
class SearchConfig:
    """Seed, stop limits and parallelism for a random search."""

    base_seed: int = 0

    # Stop strategy: either limit, or both (whichever is hit first)
    max_trials: Optional[int] = None
    max_duration: Optional[float] = None  # seconds

    # Parallelism
    trial_batch_size: int = 1
    backend: str = "serial"  # serial | threads | processes
    max_workers: Optional[int] = None

    def make_space(self, params: Mapping[str, Sampler]) -> RandomSpace:
        """Space over ``params`` seeded with ``base_seed``; trial ``i`` uses ``base_seed + i``."""
        return RandomSpace(params, seed=self.base_seed)

    def stop_strategy(self) -> StopStrategy:
        return StopStrategy(max_trials=self.max_trials, max_duration=self.max_duration)

    def make_backend(self) -> Backend:
        if self.backend == "serial":
            return get_backend("serial")
        return get_backend(self.backend, max_workers=self.max_workers)


# ----------------------------------------------------------
# Vowpal Wabbit cross validation
# ----------------------------------------------------------
@dataclass
class CrossValidationConfig:
    """K-fold cross validation of an external vw learner."""

    num_folds: int = 5

    # Flag templates, e.g. "--loss_function logistic -l {learning_rate}"
    train_params: Optional[str] = None
    test_params: Optional[str] = None

    # Append point values that no placeholder references as vw flags
    append_unused: bool = True

    vw_executable: str | Sequence[str] = "vw"
    cache_dir: Optional[str] = None
