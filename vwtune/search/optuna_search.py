"""
Thin wrapper around Optuna studies.

OptunaSearch is a TPE-guided alternative to RandomSearch: same space,
same objective, but Optuna decides which point to try next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import optuna
from optuna.study import Study

from ..core.point import Point
from ..errors import NoValidResultError
from .adapter import ObjectiveAdapter


@dataclass
class OptunaSearch:
    """
    Convenience wrapper around an Optuna study.

    Trial evaluation is delegated to an ObjectiveAdapter. The underlying
    study stays accessible for anything this wrapper does not cover.
    """

    study: Study
    adapter: ObjectiveAdapter

    def run(
        self,
        n_trials: int,
        n_jobs: int = 1,
        timeout: Optional[float] = None,
    ) -> Study:
        """
        Run hyperparameter optimization.

        Parameters
        ----------
        n_trials:
            Maximum number of trials to run.
        n_jobs:
            Number of parallel threads evaluating trials.
        timeout:
            Maximum optimization time in seconds. If None there is no
            time limit.

        Returns
        -------
        Study
            The underlying Optuna study with completed trials.
        """
        self.study.optimize(
            self.adapter.objective,
            n_trials=n_trials,
            n_jobs=n_jobs,
            timeout=timeout,
        )
        return self.study

    def _completed(self) -> list:
        return self.study.get_trials(
            deepcopy=False, states=(optuna.trial.TrialState.COMPLETE,)
        )

    @property
    def best_point(self) -> Point:
        """
        Return the best point found so far.
        """
        if not self._completed():
            raise NoValidResultError("No valid result: no trial completed")
        return Point(self.study.best_params)

    @property
    def best_loss(self) -> float:
        """
        Return the lowest loss found so far.
        """
        if not self._completed():
            raise NoValidResultError("No valid result: no trial completed")
        return float(self.study.best_value)

    @property
    def best_trial(self) -> Any:
        return self.study.best_trial

    @classmethod
    def from_storage(
        cls,
        adapter: ObjectiveAdapter,
        study_name: str = "vwtune",
        storage: Optional[str] = None,
        seed: Optional[int] = None,
        load_if_exists: bool = True,
    ) -> "OptunaSearch":
        """
        Create an OptunaSearch with a seeded TPE sampler.

        Parameters
        ----------
        adapter:
            ObjectiveAdapter used to evaluate trials.
        study_name:
            Name of the Optuna study.
        storage:
            Storage URL, e.g. "sqlite:///vwtune.db" to persist and resume
            studies. In memory when None.
        seed:
            Seed for the TPE sampler.
        load_if_exists:
            Whether to reuse an existing study with the same name.

        Returns
        -------
        OptunaSearch
            New search wrapper instance.
        """
        study = optuna.create_study(
            study_name=study_name,
            storage=storage,
            direction="minimize",
            sampler=optuna.samplers.TPESampler(seed=seed),
            load_if_exists=load_if_exists,
        )
        return cls(study=study, adapter=adapter)
