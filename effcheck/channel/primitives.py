from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from effcheck.atom import Atom, as_atom
from effcheck.channel.frames import Handler
from effcheck.effects.base import EffectBase
from effcheck.program import ProgramBase, ProgramGenerator

T = TypeVar("T")


class ControlPrimitive(ProgramBase[Any]):
    """Instructions interpreted by the machine itself rather than by handlers."""

    def to_generator(self) -> ProgramGenerator[Any]:
        result = yield self
        return result


@dataclass(frozen=True)
class WithHandler(ControlPrimitive, Generic[T]):
    handler: Handler
    program: ProgramBase[T]

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError(f"handler must be callable, got {type(self.handler).__name__}")
        if not isinstance(self.program, ProgramBase):
            raise TypeError(f"program must be a Program, got {type(self.program).__name__}")


@dataclass(frozen=True)
class WithLabel(ControlPrimitive, Generic[T]):
    atom: Atom
    program: ProgramBase[T]
    index: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.program, ProgramBase):
            raise TypeError(f"program must be a Program, got {type(self.program).__name__}")
        if self.index is not None and self.index < 0:
            raise ValueError(f"label index must be non-negative, got {self.index}")


@dataclass(frozen=True)
class Abort(ControlPrimitive):
    """Unwind to the WithHandler owning the running handler, yielding ``value``."""

    value: Any = None


def with_handler(handler: Handler, program: ProgramBase[T]) -> WithHandler[T]:
    return WithHandler(handler=handler, program=program)


def label(
    name: Atom | str | int, program: ProgramBase[T], index: int | None = None
) -> WithLabel[T]:
    return WithLabel(atom=as_atom(name), program=program, index=index)


def perform(effect: EffectBase) -> EffectBase:
    """Program performing ``effect``; ``yield effect`` inside ``@do`` code is equivalent."""

    if not isinstance(effect, EffectBase):
        raise TypeError(f"perform expects an effect, got {type(effect).__name__}")
    return effect


__all__ = [
    "Abort",
    "ControlPrimitive",
    "WithHandler",
    "WithLabel",
    "label",
    "perform",
    "with_handler",
]
