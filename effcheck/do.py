"""
The do decorator for the effcheck system.

This module provides the @do decorator that converts generator functions
into functions returning re-runnable Programs.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from functools import update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar

from effcheck.program import GeneratorProgram, Program, ProgramGenerator

P = ParamSpec("P")
T = TypeVar("T")


class DoFunction(Generic[P, T]):
    """Callable wrapper turning a generator function into a Program factory."""

    def __init__(self, func: Callable[P, ProgramGenerator[T]]) -> None:
        if not inspect.isgeneratorfunction(func):
            raise TypeError(
                f"@do expects a generator function, got {getattr(func, '__name__', func)!r}"
            )
        self.original_func = func
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> Program[T]:
        func = self.original_func

        def factory() -> ProgramGenerator[T]:
            return func(*args, **kwargs)

        return GeneratorProgram(factory, name=self.original_func.__name__)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return _BoundDoFunction(self, instance)

    def __repr__(self) -> str:
        return f"<do {self.original_func.__qualname__}>"


class _BoundDoFunction:
    def __init__(self, function: DoFunction[Any, Any], instance: Any) -> None:
        self._function = function
        self._instance = instance

    def __call__(self, *args: Any, **kwargs: Any) -> Program[Any]:
        return self._function(self._instance, *args, **kwargs)


def do(func: Callable[P, ProgramGenerator[T]]) -> DoFunction[P, T]:
    """
    Decorator that converts a generator function into a Program factory.

    Calling the decorated function does not run anything: it returns a
    Program that captures the arguments. Every time a strategy drives that
    Program a fresh generator is created, so the same generator expression
    can be sampled, shrunk and replayed many times.

    Inside the body, ``yield`` performs an effect or runs a sub-program and
    evaluates to its answer:

        @do
        def pairs():
            x = yield integers(0, 10)
            y = yield integers(x, 10)
            return (x, y)

    Exceptions raised by a handler surface at the ``yield`` that performed the
    effect, so ordinary ``try``/``except`` works around sub-programs. The
    trial-ending ``Abort`` unwinding is not an exception: it closes the
    generator, which runs ``finally`` blocks but skips ``except`` clauses.
    """

    return DoFunction(func)


__all__ = ["DoFunction", "do"]
