import shutil
import sys
from pathlib import Path

import pytest

from vwtune.errors import LossParseFailure, ProcessFailure
from vwtune.objective.vw.process import ProcessOutcome

FAKE_VW = Path(__file__).with_name("fake_vw.py")


@pytest.fixture
def fake_vw_command():
    return [sys.executable, str(FAKE_VW)]


@pytest.fixture
def dataset():
    return [f"{1 if i % 3 else -1} | f{i}:1 g:{i % 7}" for i in range(23)]


class SpyRunner:
    """
    In-process VwRunner double.

    Caches are plain copies of the shard text, models are small marker
    files, and test losses are served from ``losses`` in call order.
    """

    def __init__(self, losses=None, fail_train_on=None, fail_test_on=None, no_loss_on=None, fail_cache_on=None):
        self.losses = list(losses or [0.5])
        self.fail_train_on = set(fail_train_on or ())
        self.fail_test_on = set(fail_test_on or ())
        self.no_loss_on = set(no_loss_on or ())
        self.fail_cache_on = set(fail_cache_on or ())
        self.calls = []
        self.model_files = []
        self._tests = 0
        self._trains = 0
        self._caches = 0

    def build_cache(self, data_file, cache_file, params=""):
        self.calls.append(("cache", str(cache_file), params))
        n = self._caches
        self._caches += 1
        if n in self.fail_cache_on:
            Path(cache_file).write_text("partial")
            raise ProcessFailure("spy cache failure", ProcessOutcome(args=["cache"], exit_code=3))
        shutil.copyfile(data_file, cache_file)
        return ProcessOutcome(args=["cache"], exit_code=0)

    def train(self, cache_file, model_file, params=""):
        self.calls.append(("train", str(cache_file), params))
        self.model_files.append(Path(model_file))
        n = self._trains
        self._trains += 1
        if n in self.fail_train_on:
            raise ProcessFailure("spy train failure", ProcessOutcome(args=["train"], exit_code=1))
        Path(model_file).write_text("model")
        return ProcessOutcome(args=["train"], exit_code=0)

    def test(self, cache_file, model_file, params=""):
        self.calls.append(("test", str(cache_file), params))
        assert Path(model_file).exists()
        n = self._tests
        self._tests += 1
        if n in self.fail_test_on:
            raise ProcessFailure("spy test failure", ProcessOutcome(args=["test"], exit_code=1))
        if n in self.no_loss_on:
            raise LossParseFailure("spy missing loss", ProcessOutcome(args=["test"], exit_code=0))
        loss = self.losses[n % len(self.losses)]
        return ProcessOutcome(args=["test"], exit_code=0, loss=loss)

    def count(self, kind):
        return sum(1 for c in self.calls if c[0] == kind)


@pytest.fixture
def spy_runner():
    return SpyRunner()
