from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

import numpy as np

from ..errors import ConfigurationError
from ..utils.seed import derive_seed, make_rng
from .point import Point
from .sampler import Sampler, draw


@dataclass(frozen=True)
class RandomSpace:
    """
    Named collection of samplers with its own seeded generator.

    ``sample()`` advances the generator, so consecutive calls give
    different points, and two spaces built from the same samplers and
    seed give the same sequence. ``point_for_trial`` does not touch this
    space's generator at all: it seeds a fresh one from
    ``(seed, trial_index)``, which is what the search driver uses.
    """

    params: Mapping[str, Sampler] = field(default_factory=dict)
    seed: int = 0
    rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name, sampler in self.params.items():
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"Parameter names must be non-empty strings, got {name!r}")
            if not isinstance(sampler, Sampler):
                raise ConfigurationError(
                    f"Parameter '{name}' must map to a Sampler, got {type(sampler).__name__}"
                )
        object.__setattr__(self, "params", dict(self.params))
        object.__setattr__(self, "rng", make_rng(self.seed))

    @property
    def names(self) -> list[str]:
        return list(self.params)

    def sample(self) -> Point:
        return Point({name: draw(sampler, self.rng) for name, sampler in self.params.items()})

    def with_seed(self, seed: int) -> "RandomSpace":
        return replace(self, seed=seed)

    def point_for_trial(self, trial_index: int) -> Point:
        return self.with_seed(derive_seed(self.seed, trial_index)).sample()
