"""
K-fold partitioning of a vw dataset into per-fold cache files.

Record ``i`` belongs to bucket ``i % num_folds``. Fold ``k`` tests on
bucket ``k`` and trains on every other bucket, so each record lands in
exactly one test set and ``num_folds - 1`` training sets. Each shard is
written to a scratch text file, turned into a vw cache by vw itself, and
the text file is removed; only the caches stay on disk.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from ...errors import ConfigurationError
from ...utils.data import write_records
from ...utils.files import remove_quietly, scoped_temp_file
from .process import VwRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fold:
    index: int
    train_cache: Path
    test_cache: Path


def check_fold_count(num_folds: int, num_records: int | None = None) -> None:
    if isinstance(num_folds, bool) or not isinstance(num_folds, int):
        raise ConfigurationError(f"num_folds must be an integer, got {num_folds!r}")
    if num_folds < 2:
        raise ConfigurationError(f"num_folds must be >= 2, got {num_folds}")
    if num_records is None:
        return
    if num_records == 0:
        raise ConfigurationError("Dataset is empty")
    if num_folds > num_records:
        raise ConfigurationError(
            f"num_folds ({num_folds}) exceeds the number of records ({num_records})"
        )


def check_records(records: Sequence[str]) -> None:
    """Every record must be a single line, since caches are written one record per line."""
    for i, record in enumerate(records):
        if not isinstance(record, str):
            raise ConfigurationError(f"Record {i} must be a string, got {type(record).__name__}")
        line = record.rstrip("\r\n")
        if "\n" in line or "\r" in line:
            raise ConfigurationError(f"Record {i} spans several lines: {record[:80]!r}")


def fold_assignments(num_records: int, num_folds: int) -> List[int]:
    """Bucket index of every record."""
    return [i % num_folds for i in range(num_records)]


def partition(records: Sequence[str], num_folds: int) -> List[Tuple[List[str], List[str]]]:
    """(train, test) record lists for every fold, in fold order."""
    check_fold_count(num_folds, len(records))
    buckets = fold_assignments(len(records), num_folds)
    folds = []
    for k in range(num_folds):
        train = [r for r, b in zip(records, buckets) if b != k]
        test = [r for r, b in zip(records, buckets) if b == k]
        folds.append((train, test))
    return folds


class KFoldSplitter:
    def __init__(self, runner: VwRunner | None = None, cache_dir: str | os.PathLike | None = None) -> None:
        self.runner = runner or VwRunner()
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None

    def split(self, dataset: Iterable[str], num_folds: int, train_params: str = "") -> List[Fold]:
        """
        Build train/test caches for every fold.

        Args:
            dataset: vw examples, one record per element
            num_folds: number of folds, at least 2 and at most len(dataset)
            train_params: cache-affecting vw options (e.g. "-b 24")

        Returns:
            one Fold per fold index, caches already on disk

        Raises:
            ConfigurationError: bad fold count, empty dataset or a multi-line record, before any vw run
            ProcessFailure: vw failed to build a cache; caches built so far are removed
        """
        check_fold_count(num_folds)
        records = list(dataset)
        check_fold_count(num_folds, len(records))
        check_records(records)

        owns_dir = self.cache_dir is None
        cache_dir = self.cache_dir or Path(tempfile.mkdtemp(prefix="vwtune-cache-"))
        cache_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Building {num_folds}-fold vw caches for {len(records)} records in {cache_dir}")
        folds: List[Fold] = []
        written: List[Path] = []
        try:
            for k, (train, test) in enumerate(partition(records, num_folds)):
                train_cache = cache_dir / f"fold-{k}-train.cache"
                test_cache = cache_dir / f"fold-{k}-test.cache"
                self._write_cache(train, train_cache, train_params, cache_dir, written)
                self._write_cache(test, test_cache, train_params, cache_dir, written)
                logger.debug(f"Fold {k}: {len(train)} train / {len(test)} test records")
                folds.append(Fold(index=k, train_cache=train_cache, test_cache=test_cache))
        except BaseException:
            logger.warning(f"Cache generation failed; removing {len(written)} partial caches in {cache_dir}")
            if owns_dir:
                shutil.rmtree(cache_dir, ignore_errors=True)
            else:
                for path in written:
                    remove_quietly(path)
            raise
        return folds

    def _write_cache(
        self, records: List[str], cache_file: Path, params: str, directory: Path, written: List[Path]
    ) -> None:
        with scoped_temp_file(prefix=f"{cache_file.stem}-", suffix=".txt", directory=directory) as text_file:
            write_records(text_file, records)
            # vw may leave a partial cache behind even when it fails
            written.append(cache_file)
            self.runner.build_cache(text_file, cache_file, params)
