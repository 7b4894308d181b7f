"""
K-fold cross validated loss of a vw model.

The dataset is split into per-fold vw caches once, when the objective is
built; every evaluation afterwards reuses them. Evaluating a point renders
the train and test flag templates with the point's values and walks the
folds in order: train a model into a scratch file, test it, read the
average loss, remove the model. The first failing fold ends the evaluation
with its error. The result is the plain mean of the fold losses.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np

from ...core.point import Point
from ...utils.data import load_records
from ...utils.files import model_file
from .folds import Fold, KFoldSplitter, check_fold_count
from .params import ParamTemplate
from .process import VwRunner

logger = logging.getLogger(__name__)


class CrossValidationObjective:
    """
    Cross validated vw loss, usable as a search objective.

    Args:
        num_folds: number of folds, at least 2
        dataset: vw examples, one per element
        train_params: vw flag template for training, e.g. "--passes 3 -l {lr}"
        test_params: vw flag template for testing
        runner: VwRunner to execute vw with (default: ``vw`` on PATH)
        cache_dir: where fold caches go; a temporary directory when omitted
        append_unused: append point values not named in ``train_params`` as vw flags

    Example:
        >>> objective = CrossValidationObjective(
        ...     num_folds=5,
        ...     dataset=load_records("train.vw"),
        ...     train_params="--loss_function logistic -b 20 -l {learning_rate}",
        ...     test_params="--loss_function logistic",
        ... )
        >>> loss = objective(Point(learning_rate=0.5))
    """

    def __init__(
        self,
        num_folds: int,
        dataset: Iterable[str],
        train_params: str | None = None,
        test_params: str | None = None,
        runner: VwRunner | None = None,
        cache_dir: str | os.PathLike | None = None,
        append_unused: bool = True,
    ) -> None:
        check_fold_count(num_folds)
        records = list(dataset)
        check_fold_count(num_folds, len(records))

        self.num_folds = num_folds
        self.train_template = ParamTemplate(train_params, append_unused=append_unused)
        self.test_template = ParamTemplate(test_params, append_unused=False)
        cache_params = self.train_template.cache_params()

        self.runner = runner or VwRunner()
        self._owns_cache_dir = cache_dir is None
        splitter = KFoldSplitter(self.runner, cache_dir=cache_dir)
        self.folds: List[Fold] = splitter.split(records, num_folds, cache_params)
        self.cache_dir: Path = self.folds[0].train_cache.parent

    @classmethod
    def from_path(cls, num_folds: int, path: str | os.PathLike, **kwargs) -> "CrossValidationObjective":
        return cls(num_folds, load_records(path), **kwargs)

    @classmethod
    def from_config(cls, config, dataset: Iterable[str]) -> "CrossValidationObjective":
        return cls(
            num_folds=config.num_folds,
            dataset=dataset,
            train_params=config.train_params,
            test_params=config.test_params,
            runner=VwRunner(config.vw_executable),
            cache_dir=config.cache_dir,
            append_unused=config.append_unused,
        )

    # ------------------------------------------------------------------
    # Objective
    # ------------------------------------------------------------------
    def __call__(self, point: Point) -> float:
        return self.evaluate(point)

    def evaluate(self, point: Point) -> float:
        losses = self.fold_losses(point)
        avg = float(np.mean(losses))
        logger.info(f"Avg losses for all folds: {losses}")
        logger.info(f"Cross validated avg loss: {avg}")
        return avg

    def fold_losses(self, point: Point) -> List[float]:
        """Per-fold losses, in fold order, without averaging."""
        train_params = self.train_template.render(point)
        test_params = self.test_template.render(point)
        logger.info(f"vw training params: {train_params}")
        logger.info(f"vw testing params: {test_params}")
        return [self._run_fold(fold, train_params, test_params) for fold in self.folds]

    def _run_fold(self, fold: Fold, train_params: str, test_params: str) -> float:
        with model_file(fold.index, directory=self.cache_dir) as model_path:
            logger.debug(f"Fold {fold.index}: TRAINING -> {model_path.name}")
            self.runner.train(fold.train_cache, model_path, train_params)

            logger.debug(f"Fold {fold.index}: TESTING")
            outcome = self.runner.test(fold.test_cache, model_path, test_params)

        logger.debug(f"Fold {fold.index}: FOLD_DONE loss={outcome.loss}")
        return outcome.loss

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    @property
    def cache_files(self) -> Sequence[Path]:
        return [p for fold in self.folds for p in (fold.train_cache, fold.test_cache)]

    def close(self) -> None:
        """Remove the fold caches if this objective created their directory."""
        if self._owns_cache_dir and self.cache_dir.exists():
            shutil.rmtree(self.cache_dir, ignore_errors=True)
            logger.debug(f"Removed vw cache directory {self.cache_dir}")

    def __enter__(self) -> "CrossValidationObjective":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
