import logging

from .errors import (
    VwTuneError,
    ConfigurationError,
    TrialError,
    ProcessFailure,
    LossParseFailure,
    DistributionFailure,
    NoValidResultError,
)
from .core import (
    Point,
    Sampler,
    uniform,
    log_uniform,
    randint,
    choice,
    RandomSpace,
    StopStrategy,
    stop_after_max_trials,
    stop_after_max_duration,
    stop_after_max_trials_or_duration,
    RandomSearch,
    SearchResult,
    TrialResult,
    HistoryCallback,
    NoImprovementStopping,
    SerialBackend,
    ThreadPoolBackend,
    ProcessPoolBackend,
    get_backend,
    minimize,
)
from .config import SearchConfig, CrossValidationConfig
from .objective import CrossValidationObjective, VwRunner

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
