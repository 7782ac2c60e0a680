"""
Shrink orderings for numeric values.

Candidates move from ``origin`` toward the value being shrunk: the origin
first, then a bisection of the interval between the last rejected point and
the value. Under a shrink search that commits to the first failing candidate
this is a binary search for the boundary between passing and failing inputs.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from effcheck.domains import Domain

FLOAT_BISECTION_STEPS = 64


def shrink_candidates(value: Any, domain: Domain[Any]) -> list[Any]:
    """Ordered candidates for ``value`` nearer to the origin of ``domain``."""

    return [c for c in domain.shrink_candidates(value) if domain.contains(c)]


def shrink_integer(
    value: int, origin: int, lo: int | None = None, hi: int | None = None
) -> Iterator[int]:
    """Yield integers strictly closer to ``origin`` than ``value``.

    >>> list(shrink_integer(73, 0))
    [0, 37, 55, 64, 69, 71, 72]
    """

    if value == origin:
        return
    if (lo is None or lo <= origin) and (hi is None or origin <= hi):
        yield origin
    if value > origin:
        low = origin + 1
        while low < value:
            mid = low + (value - low) // 2
            if lo is None or mid >= lo:
                yield mid
            low = mid + 1
    else:
        high = origin - 1
        while high > value:
            mid = high - (high - value) // 2
            if hi is None or mid <= hi:
                yield mid
            high = mid - 1


def shrink_float(
    value: float, origin: float, lo: float | None = None, hi: float | None = None
) -> Iterator[float]:
    """Float counterpart of :func:`shrink_integer`.

    Integral values are tried before fractional ones. The bisection stops
    after ``FLOAT_BISECTION_STEPS`` halvings or when floats run out.
    """

    if math.isnan(value):
        yield origin
        return
    if value == origin:
        return

    def admissible(candidate: float) -> bool:
        if lo is not None and candidate < lo:
            return False
        if hi is not None and candidate > hi:
            return False
        return abs(candidate - origin) < abs(value - origin)

    seen: set[float] = set()

    def fresh(candidate: float) -> bool:
        if candidate in seen or not admissible(candidate):
            return False
        seen.add(candidate)
        return True

    if fresh(origin):
        yield origin
    if math.isinf(value):
        return

    truncated = float(math.trunc(value))
    if truncated != value and fresh(truncated):
        yield truncated

    if truncated != origin and abs(truncated) < abs(value):
        for candidate in shrink_integer(int(truncated), int(origin)):
            if fresh(float(candidate)):
                yield float(candidate)

    low = origin
    for _ in range(FLOAT_BISECTION_STEPS):
        mid = low + (value - low) / 2
        if mid == value or mid == low:
            break
        if fresh(mid):
            yield mid
        low = mid


__all__ = ["FLOAT_BISECTION_STEPS", "shrink_candidates", "shrink_float", "shrink_integer"]
