import tempfile
from collections import Counter
from pathlib import Path

import pytest

from vwtune import ConfigurationError, ProcessFailure
from vwtune.objective.vw.folds import KFoldSplitter, fold_assignments, partition

from conftest import SpyRunner


def read_cache(path):
    return Path(path).read_text(encoding="utf-8").splitlines()


@pytest.mark.parametrize("n_records,k", [(2, 2), (10, 3), (23, 5), (7, 7), (100, 10)])
def test_partition_completeness(n_records, k):
    records = [f"r{i}" for i in range(n_records)]
    folds = partition(records, k)

    test_counts = Counter(r for _, test in folds for r in test)
    train_counts = Counter(r for train, _ in folds for r in train)

    assert len(folds) == k
    assert sorted(test_counts) == sorted(records)
    assert set(test_counts.values()) == {1}
    assert set(train_counts.values()) == {k - 1}
    for train, test in folds:
        assert not set(train) & set(test)
        assert len(train) + len(test) == n_records


def test_partition_is_deterministic_round_robin():
    records = [f"r{i}" for i in range(9)]
    assert partition(records, 3) == partition(records, 3)
    assert fold_assignments(7, 3) == [0, 1, 2, 0, 1, 2, 0]
    assert partition(records, 3)[1][1] == ["r1", "r4", "r7"]


def test_split_writes_one_cache_pair_per_fold(tmp_path, dataset):
    runner = SpyRunner()
    folds = KFoldSplitter(runner, cache_dir=tmp_path).split(dataset, 4, "-b 18")

    assert [f.index for f in folds] == [0, 1, 2, 3]
    assert runner.count("cache") == 8
    assert all(params == "-b 18" for kind, _, params in runner.calls)

    for fold in folds:
        assert fold.train_cache.exists() and fold.test_cache.exists()
        assert read_cache(fold.test_cache) == dataset[fold.index :: 4]
        assert len(read_cache(fold.train_cache)) == len(dataset) - len(dataset[fold.index :: 4])

    # only caches remain; shard text files are cleaned up
    assert sorted(p.suffix for p in tmp_path.iterdir()) == [".cache"] * 8


def test_split_twice_gives_identical_caches(tmp_path, dataset):
    a = KFoldSplitter(SpyRunner(), cache_dir=tmp_path / "a").split(dataset, 3)
    b = KFoldSplitter(SpyRunner(), cache_dir=tmp_path / "b").split(dataset, 3)
    for fa, fb in zip(a, b):
        assert read_cache(fa.train_cache) == read_cache(fb.train_cache)
        assert read_cache(fa.test_cache) == read_cache(fb.test_cache)


@pytest.mark.parametrize(
    "records,k",
    [
        (["a", "b", "c"], 1),
        (["a", "b", "c"], 0),
        (["a", "b", "c"], 4),
        ([], 2),
        (["a", "b", "c"], 2.0),
    ],
)
def test_bad_configuration_fails_before_any_process(tmp_path, records, k):
    runner = SpyRunner()
    with pytest.raises(ConfigurationError):
        KFoldSplitter(runner, cache_dir=tmp_path).split(records, k)
    assert runner.calls == []
    assert list(tmp_path.iterdir()) == []


def test_split_accepts_iterators(tmp_path):
    runner = SpyRunner()
    folds = KFoldSplitter(runner, cache_dir=tmp_path).split(iter(["a", "b", "c", "d"]), 2)
    assert read_cache(folds[0].test_cache) == ["a", "c"]
    assert read_cache(folds[0].train_cache) == ["b", "d"]


def test_failed_split_removes_partial_caches_from_caller_dir(tmp_path, dataset):
    runner = SpyRunner(fail_cache_on={2})
    with pytest.raises(ProcessFailure):
        KFoldSplitter(runner, cache_dir=tmp_path).split(dataset, 3)

    assert runner.count("cache") == 3
    assert list(tmp_path.iterdir()) == []


def test_failed_split_removes_its_own_cache_dir(tmp_path, monkeypatch, dataset):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    with pytest.raises(ProcessFailure):
        KFoldSplitter(SpyRunner(fail_cache_on={1})).split(dataset, 2)

    assert list(tmp_path.glob("vwtune-cache-*")) == []


@pytest.mark.parametrize("bad", ["1 | a\n-1 | b", "1 | a\r-1 | b", 7])
def test_multi_line_or_non_text_records_are_rejected(tmp_path, bad):
    runner = SpyRunner()
    with pytest.raises(ConfigurationError):
        KFoldSplitter(runner, cache_dir=tmp_path).split(["1 | a", bad, "-1 | c"], 2)
    assert runner.calls == []


def test_trailing_newlines_are_not_extra_records(tmp_path):
    folds = KFoldSplitter(SpyRunner(), cache_dir=tmp_path).split(["1 | a\n", "-1 | b\r\n"], 2)
    assert read_cache(folds[0].test_cache) == ["1 | a"]
