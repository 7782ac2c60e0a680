from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from effcheck.do import do
from effcheck.domains import Elements, FloatRange, IntRange, Presence
from effcheck.effects import SampleEffect
from effcheck.gen.primitives import current_size, sample_from
from effcheck.program import ProgramGenerator


@do
def integers(
    lo: int | None = None, hi: int | None = None, *, origin: int | None = None
) -> ProgramGenerator[int]:
    """Integers in ``[lo, hi]``. A missing bound is the size budget away from zero."""

    if lo is None or hi is None:
        n = yield current_size()
        if lo is None:
            lo = min(hi if hi is not None else 0, 0) - n
        if hi is None:
            hi = max(lo, 0) + n
    return (yield sample_from(IntRange(lo, hi, origin), "integers"))


@do
def floats(lo: float | None = None, hi: float | None = None) -> ProgramGenerator[float]:
    if lo is None or hi is None:
        n = yield current_size()
        if lo is None:
            lo = min(hi if hi is not None else 0.0, 0.0) - n
        if hi is None:
            hi = max(lo, 0.0) + n
    if math.isnan(lo) or math.isnan(hi):
        raise ValueError("float bounds must not be NaN")
    return (yield sample_from(FloatRange(float(lo), float(hi)), "floats"))


def booleans(probability: float = 0.5) -> SampleEffect:
    return sample_from(Presence(probability), "booleans")


@do
def sampled_from(items: Sequence[Any]) -> ProgramGenerator[Any]:
    domain = Elements(items)
    index = yield sample_from(domain, "sampled_from")
    return domain.element(index)


__all__ = ["booleans", "floats", "integers", "sampled_from"]
