"""
Adapters that connect a RandomSpace and an objective to Optuna.

The adapter keeps Optuna out of the core: spaces and objectives know
nothing about trials. ``suggest_point`` translates each Sampler into the
matching ``trial.suggest_*`` call, and ObjectiveAdapter wraps the whole
thing into a callable that ``study.optimize`` accepts.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

import optuna
from optuna.trial import Trial

from ..core.point import Point
from ..core.space import RandomSpace
from ..errors import TrialError

logger = logging.getLogger(__name__)


def suggest_point(trial: Trial, space: RandomSpace) -> Point:
    """
    Ask an Optuna trial for one value per sampler in ``space``.

    Parameters
    ----------
    trial:
        Optuna trial object.
    space:
        Space whose samplers define the distributions.

    Returns
    -------
    Point
        Point with the same keys as the space.
    """
    values = {}
    for name, sampler in space.params.items():
        kind = sampler.kind
        if kind == "uniform":
            values[name] = trial.suggest_float(name, sampler.low, sampler.high)
        elif kind == "log_uniform":
            values[name] = trial.suggest_float(name, sampler.low, sampler.high, log=True)
        elif kind == "int":
            values[name] = trial.suggest_int(name, int(sampler.low), int(sampler.high))
        elif kind == "choice":
            values[name] = trial.suggest_categorical(name, list(sampler.choices))
        else:
            raise KeyError(f"Unknown sampler kind '{kind}' for '{name}'")
    return Point(values)


class ObjectiveAdapter:
    """
    Expose a vwtune objective as an Optuna objective.

    Trial level failures (vw exiting non-zero, no loss printed) are logged
    and turned into pruned trials, so Optuna moves on and never reports
    a failed trial as the best one.
    """

    def __init__(self, space: RandomSpace, objective: Callable[[Point], float]) -> None:
        """
        Parameters
        ----------
        space:
            Search space to suggest points from.
        objective:
            Callable mapping a Point to a loss. Lower is better, so the
            study direction must be "minimize".
        """
        self._space = space
        self._objective = objective

    def objective(self, trial: Trial) -> float:
        """
        Optuna compatible objective function.

        Parameters
        ----------
        trial:
            Optuna trial object.

        Returns
        -------
        float
            Loss for this trial.
        """
        point = suggest_point(trial, self._space)
        try:
            loss = float(self._objective(point))
        except TrialError as exc:
            logger.warning(f"Trial {trial.number} failed: {exc}")
            trial.set_user_attr("error", f"{type(exc).__name__}: {exc}"[:500])
            raise optuna.TrialPruned() from exc

        if not math.isfinite(loss):
            logger.warning(f"Trial {trial.number} returned non-finite loss {loss!r}")
            raise optuna.TrialPruned()
        return loss
