import logging

import pytest

from vwtune import (
    ConfigurationError,
    CrossValidationConfig,
    RandomSpace,
    SearchConfig,
    SerialBackend,
    ThreadPoolBackend,
    get_backend,
    uniform,
)
from vwtune.utils import configure_logging


def test_search_config_builds_stop_strategy_and_backend():
    cfg = SearchConfig(max_trials=10, max_duration=60, backend="threads", max_workers=2)

    stop = cfg.stop_strategy()
    assert stop.max_trials == 10
    assert stop.max_duration == 60.0

    with cfg.make_backend() as backend:
        assert isinstance(backend, ThreadPoolBackend)
        assert backend.max_workers == 2


def test_search_config_without_limits_is_rejected():
    with pytest.raises(ConfigurationError):
        SearchConfig().stop_strategy()


def test_cross_validation_config_defaults():
    cfg = CrossValidationConfig()
    assert cfg.num_folds == 5
    assert cfg.append_unused is True
    assert cfg.vw_executable == "vw"


def test_get_backend():
    assert isinstance(get_backend("serial"), SerialBackend)
    assert isinstance(get_backend("Threads", max_workers=1), ThreadPoolBackend)
    with pytest.raises(ConfigurationError):
        get_backend("spark")
    with pytest.raises(ConfigurationError):
        ThreadPoolBackend(max_workers=0)


def test_configure_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "logs" / "vwtune.log"
    configure_logging("DEBUG", log_file=log_file)
    logger = configure_logging("DEBUG", log_file=log_file)

    try:
        assert len(logger.handlers) == 3  # NullHandler + console + file
        logging.getLogger("vwtune.objective.vw.process").debug("hello from a module logger")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from a module logger" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            if getattr(handler, "_vwtune_handler", False):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.NOTSET)


def test_search_config_seeds_the_space():
    cfg = SearchConfig(base_seed=17, max_trials=3)
    space = cfg.make_space({"x": uniform(0.0, 1.0)})

    assert space.seed == 17
    assert space.point_for_trial(2) == RandomSpace({"x": uniform(0.0, 1.0)}, seed=19).sample()
