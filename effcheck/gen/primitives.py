"""
Primitive generators.

Everything else in :mod:`effcheck.gen` is written in terms of these: a
Sample of a domain, a read of the size budget, reporting an outcome, and the
two scoping forms ``label`` and ``resize``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from effcheck.atom import Atom
from effcheck.channel import WithHandler, label
from effcheck.do import do
from effcheck.domains import Domain
from effcheck.effects import (
    EffectBase,
    SampleEffect,
    SizeEffect,
    SucceedEffect,
    sample,
    size,
    succeed,
)
from effcheck.outcome import Outcome, coerce_outcome
from effcheck.program import Program, ProgramGenerator

T = TypeVar("T")


def sample_from(domain: Domain, label: Atom | str | int | None = None) -> SampleEffect:
    return sample(domain, label)


def current_size() -> SizeEffect:
    return size()


def succeed_or_fail(outcome: Outcome | bool | None) -> SucceedEffect:
    return succeed(coerce_outcome(outcome))


def resize(new_size: int, program: Program[T]) -> WithHandler[T]:
    """Run ``program`` with the size budget fixed at ``new_size``."""

    if new_size < 0:
        raise ValueError(f"size must be non-negative, got {new_size}")

    def size_override(effect: EffectBase) -> Any:
        if isinstance(effect, SizeEffect):
            return new_size
        return effect

    return WithHandler(handler=size_override, program=program)


@do
def scale(fn: Callable[[int], int], program: Program[T]) -> ProgramGenerator[T]:
    """Run ``program`` with the size budget mapped through ``fn``."""

    current = yield current_size()
    return (yield resize(max(0, int(fn(current))), program))


__all__ = [
    "current_size",
    "label",
    "resize",
    "sample_from",
    "scale",
    "succeed_or_fail",
]
