"""
Program class for the effcheck system.

A program is a lazy, re-runnable computation. Running it asks for a fresh
Python generator, which yields effects, control primitives or other programs
and eventually returns a value. Generators are single-use, so a program keeps
a factory and builds a new generator every time a strategy drives it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Generator, Iterable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

ProgramGenerator = Generator[Any, Any, T]


class ProgramBase(ABC, Generic[T]):
    """Runtime base class for all effcheck programs (effects, primitives, calls)."""

    @abstractmethod
    def to_generator(self) -> ProgramGenerator[T]:
        """Create a fresh generator that executes this program."""

    def map(self, f: Callable[[T], U]) -> "Program[U]":
        """Map a function over this program's result."""

        if not callable(f):
            raise TypeError("mapper must be callable")

        def factory() -> ProgramGenerator[U]:
            value = yield self
            return f(value)

        return GeneratorProgram(factory, name=f"map({_describe(self)})")

    def flat_map(self, f: Callable[[T], "Program[U]"]) -> "Program[U]":
        """Monadic bind operation."""

        if not callable(f):
            raise TypeError("binder must be callable returning a Program")

        def factory() -> ProgramGenerator[U]:
            value = yield self
            next_prog = f(value)
            if not isinstance(next_prog, ProgramBase):
                raise TypeError(
                    "binder must return a Program; got "
                    f"{type(next_prog).__name__}"
                )
            return (yield next_prog)

        return GeneratorProgram(factory, name=f"flat_map({_describe(self)})")

    @staticmethod
    def pure(value: T) -> "Program[T]":
        def factory() -> ProgramGenerator[T]:
            return value
            yield  # pragma: no cover

        return GeneratorProgram(factory, name="pure")

    @staticmethod
    def lift(value: "Program[U] | U") -> "Program[U]":
        if isinstance(value, ProgramBase):
            return value
        return ProgramBase.pure(value)

    @staticmethod
    def sequence(programs: Iterable["Program[T]"]) -> "Program[list[T]]":
        items = list(programs)

        def factory() -> ProgramGenerator[list[T]]:
            results: list[T] = []
            for program in items:
                results.append((yield program))
            return results

        return GeneratorProgram(factory, name="sequence")

    @staticmethod
    def traverse(
        items: Iterable[U], func: Callable[[U], "Program[T]"]
    ) -> "Program[list[T]]":
        return ProgramBase.sequence(func(item) for item in items)


class GeneratorProgram(ProgramBase[T]):
    """Program backed by a zero-argument generator factory."""

    __slots__ = ("factory", "name")

    def __init__(
        self, factory: Callable[[], ProgramGenerator[T]], *, name: str | None = None
    ) -> None:
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {type(factory).__name__}")
        self.factory = factory
        self.name = name or getattr(factory, "__name__", "<program>")

    def to_generator(self) -> ProgramGenerator[T]:
        gen = self.factory()
        if not isinstance(gen, Generator):
            raise TypeError(
                f"{self.name} did not produce a generator, got {type(gen).__name__}"
            )
        return gen

    def __repr__(self) -> str:
        return f"GeneratorProgram({self.name})"


def _describe(program: ProgramBase[Any]) -> str:
    name = getattr(program, "name", None)
    return name if isinstance(name, str) else type(program).__name__


Program = ProgramBase

__all__ = ["GeneratorProgram", "Program", "ProgramBase", "ProgramGenerator"]
