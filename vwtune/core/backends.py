"""
Execution backends for trial evaluation.

A backend applies one function to every item of a batch and hands back
one Outcome per item, in submission order, regardless of the order in
which workers finish. Per-item exceptions are captured in the Outcome
rather than raised, except ConfigurationError, which always propagates
since no amount of re-evaluation can fix it.
"""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Protocol, Sequence

from ..errors import ConfigurationError, DistributionFailure

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _call(fn: Callable[[Any], Any], item: Any) -> Outcome:
    try:
        return Outcome(value=fn(item))
    except ConfigurationError:
        raise
    except Exception as exc:
        return Outcome(error=exc)


class Backend(Protocol):
    def map(self, fn: Callable[[Any], Any], items: Sequence[Any]) -> List[Outcome]:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover


class SerialBackend:
    """Evaluate every item in the calling thread."""

    def map(self, fn: Callable[[Any], Any], items: Sequence[Any]) -> List[Outcome]:
        return [_call(fn, item) for item in items]

    def close(self) -> None:
        pass

    def __enter__(self) -> "SerialBackend":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class _PoolBackend:
    executor_cls: type[concurrent.futures.Executor]

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._pool: concurrent.futures.Executor | None = None

    def _executor(self) -> concurrent.futures.Executor:
        if self._pool is None:
            self._pool = self.executor_cls(max_workers=self.max_workers)
        return self._pool

    def map(self, fn: Callable[[Any], Any], items: Sequence[Any]) -> List[Outcome]:
        pool = self._executor()
        futures = [pool.submit(_call, fn, item) for item in items]
        concurrent.futures.wait(futures)

        outcomes: List[Outcome] = []
        broken = False
        for i, future in enumerate(futures):
            try:
                outcomes.append(future.result())
            except ConfigurationError:
                raise
            except concurrent.futures.BrokenExecutor as exc:
                broken = True
                logger.warning(f"Worker lost while evaluating item {i}: {exc}")
                outcomes.append(Outcome(error=DistributionFailure(f"worker lost: {exc}")))
            except Exception as exc:
                # raised outside fn, e.g. the item could not be pickled
                outcomes.append(Outcome(error=exc))

        if broken:
            self.close()
        return outcomes

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True, cancel_futures=True)
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __getstate__(self):
        state = self.__dict__.copy()
        state["_pool"] = None
        return state


class ThreadPoolBackend(_PoolBackend):
    """Evaluate items on a pool of threads. Suits objectives that spend their time in subprocesses."""

    executor_cls = concurrent.futures.ThreadPoolExecutor


class ProcessPoolBackend(_PoolBackend):
    """Evaluate items in worker processes. The function and items must be picklable."""

    executor_cls = concurrent.futures.ProcessPoolExecutor


def get_backend(name: str = "serial", **kwargs: Any) -> Backend:
    name = name.lower()
    if name == "serial":
        return SerialBackend()
    if name == "threads":
        return ThreadPoolBackend(**kwargs)
    if name == "processes":
        return ProcessPoolBackend(**kwargs)
    raise ConfigurationError(f"Unknown backend: {name}")
