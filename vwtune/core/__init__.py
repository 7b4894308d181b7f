from .point import Point
from .sampler import Sampler, uniform, log_uniform, randint, choice, draw
from .space import RandomSpace
from .stop import (
    StopStrategy,
    stop_after_max_trials,
    stop_after_max_duration,
    stop_after_max_trials_or_duration,
)
from .engine import SearchResult, SearchState, TrialResult
from .callbacks import SearchCallback, HistoryCallback, NoImprovementStopping, CallbackList
from .backends import Backend, Outcome, SerialBackend, ThreadPoolBackend, ProcessPoolBackend, get_backend
from .driver import RandomSearch, minimize
