from __future__ import annotations

from typing import Any, TypeVar

from effcheck.do import do
from effcheck.domains import IntRange, Presence
from effcheck.gen.primitives import current_size, label, sample_from
from effcheck.program import Program, ProgramGenerator

T = TypeVar("T")

_ABSENT = object()


@do
def _element(generator: Program[T], deletable: bool) -> ProgramGenerator[Any]:
    if deletable:
        present = yield sample_from(Presence(), "present")
        if not present:
            return _ABSENT
    return (yield generator)


@do
def _list_body(
    element: Program[T], min_size: int, max_size: int | None
) -> ProgramGenerator[list[T]]:
    n = yield current_size()
    upper = n if max_size is None else min(n, max_size)
    length = yield sample_from(IntRange(min_size, max(upper, min_size)), "length")
    items: list[T] = []
    for i in range(length):
        item = yield label("element", _element(element, i >= min_size), index=i)
        if item is not _ABSENT:
            items.append(item)
    return items


def lists(
    element: Program[T], *, min_size: int = 0, max_size: int | None = None
) -> Program[list[T]]:
    """Lists of at most the size budget, each element deletable while shrinking.

    An element keeps its index in the path when earlier ones are deleted.
    """

    if min_size < 0:
        raise ValueError(f"min_size must be non-negative, got {min_size}")
    if max_size is not None and max_size < min_size:
        raise ValueError(f"max_size {max_size} is below min_size {min_size}")
    return label("lists", _list_body(element, min_size, max_size))


@do
def _tuple_body(generators: tuple[Program[Any], ...]) -> ProgramGenerator[tuple[Any, ...]]:
    values = []
    for generator in generators:
        values.append((yield generator))
    return tuple(values)


def tuples(*generators: Program[Any]) -> Program[tuple[Any, ...]]:
    return label("tuples", _tuple_body(generators))


@do
def _optional_body(generator: Program[T]) -> ProgramGenerator[T | None]:
    present = yield sample_from(Presence(0.5), "present")
    if not present:
        return None
    return (yield generator)


def optionals(generator: Program[T]) -> Program[T | None]:
    """``None`` or a value of ``generator``; shrinks to ``None``."""

    return label("optionals", _optional_body(generator))


__all__ = ["lists", "optionals", "tuples"]
