
"""
Optuna integration.

Runs the same RandomSpace and objective under an Optuna study instead of
the built-in random search driver.
"""

from .adapter import ObjectiveAdapter, suggest_point
from .optuna_search import OptunaSearch
