"""
Combinators over generators.

None of these know which strategy is running. Unions and filters open a
labelled scope so their inner decisions get addresses that stay put while
other parts of the value change during shrinking.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from effcheck.do import do
from effcheck.domains import IntRange, Weighted
from effcheck.gen.primitives import current_size, label, resize, sample_from, succeed_or_fail
from effcheck.outcome import Outcome
from effcheck.program import Program, ProgramBase, ProgramGenerator

T = TypeVar("T")
U = TypeVar("U")

BRANCH = "branch"


def constant(value: T) -> Program[T]:
    return ProgramBase.pure(value)


def map_(fn: Callable[[T], U], generator: Program[T]) -> Program[U]:
    return generator.map(fn)


def bind(generator: Program[T], fn: Callable[[T], Program[U]]) -> Program[U]:
    return generator.flat_map(fn)


@do
def _union(domain: Any, generators: tuple[Program[Any], ...]) -> ProgramGenerator[Any]:
    index = yield sample_from(domain, "choice")
    return (yield label(BRANCH, generators[index], index=index))


def one_of(*generators: Program[T]) -> Program[T]:
    """Pick one of ``generators``; earlier ones are simpler.

    With no alternatives the trial is discarded.
    """

    return label("one_of", _union(IntRange(0, len(generators) - 1), generators))


def frequency(*weighted: tuple[int, Program[T]]) -> Program[T]:
    """Weighted union of ``(weight, generator)`` pairs."""

    weights = tuple(int(weight) for weight, _ in weighted)
    generators = tuple(generator for _, generator in weighted)
    return label("frequency", _union(Weighted(weights), generators))


@do
def guard(condition: bool, reason: str | None = None) -> ProgramGenerator[None]:
    """Discard the trial unless ``condition`` holds."""

    if not condition:
        yield succeed_or_fail(Outcome.discarded(reason or "guard failed"))


@do
def _retry(
    generator: Program[T], predicate: Callable[[T], bool], max_tries: int
) -> ProgramGenerator[T]:
    for attempt in range(max_tries):
        value = yield label("attempt", generator, index=attempt)
        if predicate(value):
            return value
    yield guard(False, f"no value satisfied the filter in {max_tries} attempts")


def such_that(
    generator: Program[T], predicate: Callable[[T], bool], max_tries: int = 100
) -> Program[T]:
    """Values of ``generator`` satisfying ``predicate``, retrying up to ``max_tries`` times."""

    if max_tries < 1:
        raise ValueError(f"max_tries must be positive, got {max_tries}")
    return label("such_that", _retry(generator, predicate, max_tries))


@do
def sized(fn: Callable[[int], Program[T]]) -> ProgramGenerator[T]:
    n = yield current_size()
    return (yield fn(n))


@do
def recursive(
    base: Program[T], extend: Callable[[Program[T]], Program[T]]
) -> ProgramGenerator[T]:
    """Recursive structures bounded by the size budget.

    ``extend`` receives the generator for sub-structures, which runs with the
    size decremented. At size 0 only ``base`` is used.
    """

    n = yield current_size()
    if n <= 0:
        return (yield base)
    child = resize(n - 1, recursive(base, extend))
    return (yield one_of(base, extend(child)))


__all__ = [
    "BRANCH",
    "bind",
    "constant",
    "frequency",
    "guard",
    "map_",
    "one_of",
    "recursive",
    "sized",
    "such_that",
]
