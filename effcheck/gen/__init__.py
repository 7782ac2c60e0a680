"""Generators built from the Sample, Size and Succeed effects."""

from effcheck.gen.containers import lists, optionals, tuples
from effcheck.gen.combinators import (
    BRANCH,
    bind,
    constant,
    frequency,
    guard,
    map_,
    one_of,
    recursive,
    sized,
    such_that,
)
from effcheck.gen.primitives import (
    current_size,
    label,
    resize,
    sample_from,
    scale,
    succeed_or_fail,
)
from effcheck.gen.scalars import booleans, floats, integers, sampled_from

__all__ = [
    "BRANCH",
    "bind",
    "booleans",
    "constant",
    "current_size",
    "floats",
    "frequency",
    "guard",
    "integers",
    "label",
    "lists",
    "map_",
    "one_of",
    "optionals",
    "recursive",
    "resize",
    "sample_from",
    "scale",
    "sized",
    "succeed_or_fail",
    "such_that",
    "tuples",
]
