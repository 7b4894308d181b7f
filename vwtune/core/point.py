from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

Value = float | int | str | bool


class Point(Mapping):
    """Immutable assignment of values to named hyperparameters."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Value] | None = None, /, **kwargs: Value):
        merged = dict(values or {})
        merged.update(kwargs)
        object.__setattr__(self, "_values", merged)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Point is immutable")

    def __getitem__(self, key: str) -> Value:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"Point({inner})"

    def __reduce__(self):
        return (Point, (dict(self._values),))

    def to_dict(self) -> dict[str, Value]:
        return dict(self._values)
