from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.point import Point


@runtime_checkable
class Objective(Protocol):
    """A black-box loss over points. Lower is better."""

    def __call__(self, point: Point) -> float:
        """Evaluate one point and return a finite loss."""
        ...  # pragma: no cover
