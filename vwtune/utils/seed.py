from __future__ import annotations

import numpy as np


def derive_seed(base_seed: int, trial_index: int) -> int:
    """Seed for one trial: the base seed offset by the trial index."""
    return int(base_seed) + int(trial_index)


def make_rng(seed: int) -> np.random.Generator:
    """Seeded generator with its first draw thrown away.

    Some generators give poorly mixed first values for small adjacent
    seeds, and trial seeds here are exactly that.
    """
    rng = np.random.default_rng(seed)
    rng.random()
    return rng
