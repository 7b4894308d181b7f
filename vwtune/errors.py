"""
Exception hierarchy for vwtune.

Configuration problems fail fast before any trial runs. Trial level
failures (process exits, unparseable output, lost workers) are recorded
against the trial that produced them and never abort the whole search.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .objective.vw.process import ProcessOutcome


class VwTuneError(Exception):
    """Base class for all vwtune errors."""


class ConfigurationError(VwTuneError, ValueError):
    """Invalid fold count, empty dataset, malformed template, bad sampler bounds."""


class TrialError(VwTuneError, RuntimeError):
    """A single trial could not produce a loss."""


class ProcessFailure(TrialError):
    """The external learner exited with a non-zero status."""

    def __init__(self, message: str, outcome: "ProcessOutcome | None" = None):
        super().__init__(message)
        self.outcome = outcome

    def __reduce__(self):
        return (type(self), (self.args[0], self.outcome))

    def __str__(self) -> str:
        msg = self.args[0]
        if self.outcome is not None and self.outcome.output.strip():
            msg = f"{msg}\n--- output tail ---\n{self.outcome.tail()}"
        return msg


class LossParseFailure(ProcessFailure):
    """The external learner exited cleanly but printed no average loss."""


class DistributionFailure(TrialError):
    """The worker evaluating a trial was lost before returning a result."""


class NoValidResultError(VwTuneError):
    """Every trial of a search failed."""

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result

    def __reduce__(self):
        return (type(self), (self.args[0], self.result))
