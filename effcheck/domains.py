"""
Domains describe the admissible answers to a Sample effect.

Every strategy treats a domain only through this interface: membership,
the origin shrinking moves toward, a random draw, and an ordered list of
shrink candidates. Values handed out for a domain are plain JSON scalars so
that replay tokens can carry them.
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from effcheck.shrink.numeric import shrink_float, shrink_integer

T = TypeVar("T")


class Domain(ABC, Generic[T]):
    """Capability interface of a Sample payload."""

    @abstractmethod
    def is_empty(self) -> bool:
        """True when no value is admissible."""

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """True when ``value`` is an admissible answer."""

    @abstractmethod
    def origin(self) -> T:
        """The simplest value; shrinking moves toward it."""

    @abstractmethod
    def draw(self, rng: random.Random, size: int) -> T:
        """Draw a value using only the documented ``random.Random`` API."""

    @abstractmethod
    def shrink_candidates(self, value: T) -> list[T]:
        """Admissible values simpler than ``value``, most aggressive first."""

    def to_json(self, value: T) -> Any:
        return value

    def from_json(self, raw: Any) -> T:
        return raw


@dataclass(frozen=True)
class IntRange(Domain[int]):
    """Integers in ``[lo, hi]``; shrinks toward ``target`` or the value nearest zero."""

    lo: int
    hi: int
    target: int | None = None

    def __post_init__(self) -> None:
        if self.target is not None and not self.lo <= self.target <= self.hi:
            raise ValueError(f"target {self.target} outside [{self.lo}, {self.hi}]")

    def is_empty(self) -> bool:
        return self.lo > self.hi

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and self.lo <= value <= self.hi
        )

    def origin(self) -> int:
        if self.target is not None:
            return self.target
        return min(max(0, self.lo), self.hi)

    def draw(self, rng: random.Random, size: int) -> int:
        return rng.randint(self.lo, self.hi)

    def shrink_candidates(self, value: int) -> list[int]:
        return list(shrink_integer(value, self.origin(), self.lo, self.hi))

    def from_json(self, raw: Any) -> int:
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        return raw


@dataclass(frozen=True)
class FloatRange(Domain[float]):
    lo: float
    hi: float

    def is_empty(self) -> bool:
        return not self.lo <= self.hi

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and self.lo <= value <= self.hi
        )

    def origin(self) -> float:
        return float(min(max(0.0, self.lo), self.hi))

    def draw(self, rng: random.Random, size: int) -> float:
        # An open side is replaced by a window of width ``size`` past the finite bound.
        width = float(max(size, 1))
        lo_open, hi_open = math.isinf(self.lo), math.isinf(self.hi)
        if lo_open and hi_open:
            return min(max(rng.uniform(-width, width), self.lo), self.hi)
        if lo_open:
            return rng.uniform(self.hi - width, self.hi)
        if hi_open:
            return rng.uniform(self.lo, self.lo + width)
        return rng.uniform(self.lo, self.hi)

    def shrink_candidates(self, value: float) -> list[float]:
        return list(shrink_float(float(value), self.origin(), self.lo, self.hi))

    def from_json(self, raw: Any) -> float:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return float(raw)
        return raw


@dataclass(frozen=True)
class Presence(Domain[bool]):
    """Whether an optional part is present; shrinks to ``False``.

    Draws ``True`` with ``probability``. The default of 1 makes deletion a
    shrink-only move, which is how list elements use it.
    """

    probability: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {self.probability}")

    def is_empty(self) -> bool:
        return False

    def contains(self, value: Any) -> bool:
        return isinstance(value, bool)

    def origin(self) -> bool:
        return False

    def draw(self, rng: random.Random, size: int) -> bool:
        if self.probability >= 1.0:
            return True
        return rng.random() < self.probability

    def shrink_candidates(self, value: bool) -> list[bool]:
        return [False] if value else []


@dataclass(frozen=True)
class Elements(Domain[int]):
    """Index into ``items``. Earlier items are simpler."""

    items: Sequence[Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def is_empty(self) -> bool:
        return len(self.items) == 0

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value < len(self.items)
        )

    def origin(self) -> int:
        return 0

    def draw(self, rng: random.Random, size: int) -> int:
        return rng.randrange(len(self.items))

    def shrink_candidates(self, value: int) -> list[int]:
        return list(shrink_integer(value, 0, 0, len(self.items) - 1))

    def element(self, index: int) -> Any:
        return self.items[index]


@dataclass(frozen=True)
class Weighted(Domain[int]):
    """Branch index drawn in proportion to ``weights``; zero-weight branches are never chosen."""

    weights: tuple[int, ...]
    _total: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if any(w < 0 for w in self.weights):
            raise ValueError(f"weights must be non-negative, got {self.weights}")
        object.__setattr__(self, "_total", sum(self.weights))

    def is_empty(self) -> bool:
        return self._total == 0

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value < len(self.weights)
            and self.weights[value] > 0
        )

    def origin(self) -> int:
        for index, weight in enumerate(self.weights):
            if weight > 0:
                return index
        return 0

    def draw(self, rng: random.Random, size: int) -> int:
        point = rng.randrange(self._total)
        for index, weight in enumerate(self.weights):
            if point < weight:
                return index
            point -= weight
        raise AssertionError("weighted draw fell off the end")

    def shrink_candidates(self, value: int) -> list[int]:
        return [
            c
            for c in shrink_integer(value, self.origin(), 0, len(self.weights) - 1)
            if self.weights[c] > 0
        ]


__all__ = ["Domain", "Elements", "FloatRange", "IntRange", "Presence", "Weighted"]
