from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from loguru import logger

from effcheck.channel.frames import (
    DispatchFrame,
    Frame,
    Handler,
    HandlerFrame,
    Kontinuation,
    LabelFrame,
    ReturnFrame,
)
from effcheck.channel.primitives import Abort, ControlPrimitive, WithHandler, WithLabel
from effcheck.effects.base import EffectBase
from effcheck.errors import UnhandledEffectError
from effcheck.path import format_path
from effcheck.program import ProgramBase

T = TypeVar("T")

logger = logger.bind(component="channel")


@dataclass(frozen=True)
class ProgramControl:
    program: Any


@dataclass(frozen=True)
class Value:
    value: Any


@dataclass(frozen=True)
class Error:
    error: BaseException


@dataclass(frozen=True)
class EffectYield:
    yielded: Any


@dataclass(frozen=True)
class Done:
    value: Any


@dataclass(frozen=True)
class Failed:
    error: BaseException


Control = ProgramControl | Value | Error | EffectYield


def _close_generator(frame: ReturnFrame) -> None:
    try:
        frame.generator.close()
    except Exception as exc:
        logger.warning("generator {} raised while closing: {!r}", frame.frame_id, exc)


def format_kontinuation(K: Iterable[Frame]) -> str:
    parts = []
    for f in K:
        if isinstance(f, ReturnFrame):
            parts.append(f"RF#{f.frame_id}")
        elif isinstance(f, HandlerFrame):
            h_name = getattr(f.handler, "__name__", type(f.handler).__name__)
            parts.append(f"HF#{f.frame_id}({h_name})")
        elif isinstance(f, LabelFrame):
            parts.append(f"LF#{f.frame_id}({format_path(f.scope)})")
        elif isinstance(f, DispatchFrame):
            parts.append(f"DF#{f.frame_id}({type(f.effect).__name__}->HF#{f.owner_id})")
        else:
            parts.append(type(f).__name__)
    return "[" + ", ".join(parts) + "]"


class Machine:
    """Steps one program to completion.

    ``K`` holds the frames, innermost last. Generators suspended at a
    ``yield`` sit in ``ReturnFrame``s; ``WithHandler`` and ``WithLabel`` push
    ``HandlerFrame`` and ``LabelFrame`` for the dynamic extent of their body;
    a ``DispatchFrame`` sits under a running handler body.
    """

    def __init__(self, program: ProgramBase[Any]) -> None:
        self.C: Control = ProgramControl(program)
        self.K: Kontinuation = []
        self.root = LabelFrame()

    def run(self) -> Any:
        while True:
            try:
                result = self.step()
            except UnhandledEffectError as exc:
                logger.debug("unhandled {} with stack {}", type(exc.effect).__name__, self)
                self.close()
                raise
            if isinstance(result, Done):
                return result.value
            if isinstance(result, Failed):
                raise result.error

    def close(self) -> None:
        while self.K:
            frame = self.K.pop()
            if isinstance(frame, ReturnFrame):
                _close_generator(frame)

    def step(self) -> Done | Failed | None:
        C, K = self.C, self.K

        if isinstance(C, ProgramControl):
            self._start(C.program)
            return None

        if isinstance(C, EffectYield):
            self._handle_yield(C.yielded)
            return None

        if isinstance(C, Value):
            if not K:
                return Done(C.value)
            frame = K[-1]
            if isinstance(frame, ReturnFrame):
                self._resume(frame, lambda gen: gen.send(C.value))
            else:
                K.pop()
            return None

        if isinstance(C, Error):
            if not K:
                return Failed(C.error)
            frame = K[-1]
            if isinstance(frame, ReturnFrame):
                self._resume(frame, lambda gen: gen.throw(C.error))
            else:
                K.pop()
            return None

        raise RuntimeError(f"Unknown control {C!r}")

    def _start(self, program: Any) -> None:
        if isinstance(program, (EffectBase, ControlPrimitive)):
            self.C = EffectYield(program)
            return
        if not isinstance(program, ProgramBase):
            self.C = Error(TypeError(f"Cannot run {type(program).__name__} as a program"))
            return
        try:
            gen = program.to_generator()
        except Exception as exc:
            self.C = Error(exc)
            return
        self.K.append(ReturnFrame(gen))
        self.C = Value(None)

    def _resume(self, frame: ReturnFrame, advance: Any) -> None:
        try:
            yielded = advance(frame.generator)
        except StopIteration as exc:
            self.K.pop()
            self.C = Value(exc.value)
        except Exception as exc:
            self.K.pop()
            self.C = Error(exc)
        else:
            self.C = EffectYield(yielded)

    def _handle_yield(self, yielded: Any) -> None:
        if isinstance(yielded, WithHandler):
            self.K.append(HandlerFrame(handler=yielded.handler))
            self.C = ProgramControl(yielded.program)
        elif isinstance(yielded, WithLabel):
            scope = self._current_scope().child(yielded.atom, yielded.index)
            self.K.append(LabelFrame(scope=scope))
            self.C = ProgramControl(yielded.program)
        elif isinstance(yielded, Abort):
            owner_id = self._dispatch_owner()
            if owner_id is None:
                self.C = Error(RuntimeError("Abort yielded outside of a handler body"))
            else:
                self._abort(owner_id, yielded.value)
        elif isinstance(yielded, EffectBase):
            self._dispatch(yielded)
        elif isinstance(yielded, ProgramBase):
            self.C = ProgramControl(yielded)
        else:
            self.C = Error(
                TypeError(
                    f"Yielded {type(yielded).__name__} is neither an effect nor a program"
                )
            )

    def _current_scope(self) -> LabelFrame:
        for frame in reversed(self.K):
            if isinstance(frame, LabelFrame):
                return frame
        return self.root

    def _dispatch_owner(self) -> int | None:
        for frame in reversed(self.K):
            if isinstance(frame, DispatchFrame):
                return frame.owner_id
        return None

    def _find_handler(self) -> HandlerFrame | None:
        skip_until: int | None = None
        for frame in reversed(self.K):
            if isinstance(frame, DispatchFrame):
                if skip_until is None:
                    skip_until = frame.owner_id
            elif isinstance(frame, HandlerFrame):
                if skip_until is not None:
                    if frame.frame_id == skip_until:
                        skip_until = None
                    continue
                return frame
        return None

    def _dispatch(self, effect: EffectBase) -> None:
        if effect.path is None:
            effect = effect.addressed(self._current_scope().child(effect.address_atom()))

        frame = self._find_handler()
        if frame is None:
            raise UnhandledEffectError(effect)

        try:
            answer = frame.handler(effect)
        except Exception as exc:
            self.C = Error(exc)
            return

        if isinstance(answer, Abort):
            self._abort(frame.frame_id, answer.value)
        elif isinstance(answer, ProgramBase):
            self.K.append(DispatchFrame(effect=effect, owner_id=frame.frame_id))
            self.C = ProgramControl(answer)
        else:
            self.C = Value(answer)

    def _abort(self, owner_id: int, value: Any) -> None:
        while self.K:
            frame = self.K.pop()
            if isinstance(frame, ReturnFrame):
                _close_generator(frame)
            elif isinstance(frame, HandlerFrame) and frame.frame_id == owner_id:
                self.C = Value(value)
                return
        raise RuntimeError(f"Abort target HF#{owner_id} is not on the stack")

    def __repr__(self) -> str:
        return f"Machine(C={type(self.C).__name__}, K={format_kontinuation(self.K)})"


def _wrap_with_handlers(
    program: ProgramBase[T], handlers: Iterable[Handler]
) -> ProgramBase[T]:
    """Wrap program with handlers. handlers[0] = innermost, handlers[N-1] = outermost."""
    result: ProgramBase[T] = program
    for handler in handlers:
        result = WithHandler(handler=handler, program=result)
    return result


def run_program(program: ProgramBase[T], handlers: Iterable[Handler] = ()) -> T:
    """Run ``program`` under ``handlers`` and return its value or raise its error."""

    return Machine(_wrap_with_handlers(program, handlers)).run()


__all__ = [
    "Control",
    "Done",
    "EffectYield",
    "Error",
    "Failed",
    "Machine",
    "ProgramControl",
    "Value",
    "format_kontinuation",
    "run_program",
]
