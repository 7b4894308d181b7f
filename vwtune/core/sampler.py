"""
Samplers for single hyperparameters.

A Sampler is a small frozen record tagged by ``kind``. All sampling goes
through :func:`draw`, so a new kind only needs a constructor here and a
branch in ``draw``. Spaces never look inside a sampler.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ..errors import ConfigurationError

KINDS = ("uniform", "log_uniform", "int", "choice")


@dataclass(frozen=True)
class Sampler:
    kind: str
    low: float | int | None = None
    high: float | int | None = None
    choices: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ConfigurationError(f"Unknown sampler kind '{self.kind}'")

        if self.kind == "choice":
            if not self.choices:
                raise ConfigurationError("choice() needs at least one value")
            return

        if self.low is None or self.high is None:
            raise ConfigurationError(f"{self.kind} sampler needs low and high bounds")

        if self.kind == "int":
            if int(self.low) != self.low or int(self.high) != self.high:
                raise ConfigurationError(
                    f"randint bounds must be integers, got ({self.low}, {self.high})"
                )
            if self.low > self.high:
                raise ConfigurationError(
                    f"randint requires low <= high, got ({self.low}, {self.high})"
                )
            return

        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ConfigurationError(f"{self.kind} bounds must be finite")
        if self.low >= self.high:
            raise ConfigurationError(
                f"{self.kind} requires low < high, got ({self.low}, {self.high})"
            )
        if self.kind == "log_uniform" and self.low <= 0:
            raise ConfigurationError(
                f"log_uniform requires a positive lower bound, got {self.low}"
            )

    def __call__(self, rng: np.random.Generator) -> Any:
        return draw(self, rng)


# ----------------------------------------------------------
# Constructors
# ----------------------------------------------------------
def uniform(low: float, high: float) -> Sampler:
    """Continuous value in ``[low, high)``."""
    return Sampler("uniform", float(low), float(high))


def log_uniform(low: float, high: float) -> Sampler:
    """Continuous value whose logarithm is uniform over ``[log(low), log(high))``."""
    return Sampler("log_uniform", float(low), float(high))


def randint(low: int, high: int) -> Sampler:
    """Integer in ``[low, high]``, both ends inclusive."""
    return Sampler("int", low, high)


def choice(values: Sequence[Any]) -> Sampler:
    """One element of ``values``, each equally likely."""
    return Sampler("choice", choices=tuple(values))


# ----------------------------------------------------------
# Dispatch
# ----------------------------------------------------------
def draw(sampler: Sampler, rng: np.random.Generator) -> Any:
    kind = sampler.kind

    if kind == "uniform":
        return float(rng.uniform(sampler.low, sampler.high))

    elif kind == "log_uniform":
        return float(math.exp(rng.uniform(math.log(sampler.low), math.log(sampler.high))))

    elif kind == "int":
        return int(rng.integers(int(sampler.low), int(sampler.high), endpoint=True))

    elif kind == "choice":
        # index instead of rng.choice so values keep their Python type
        return sampler.choices[int(rng.integers(len(sampler.choices)))]

    else:
        raise KeyError(f"Unknown sampler kind: {kind}")
