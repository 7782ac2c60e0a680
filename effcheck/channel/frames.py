from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Generator

from effcheck.atom import Atom
from effcheck.path import ROOT, Path, Segment

if TYPE_CHECKING:
    from effcheck.effects.base import EffectBase

Handler = Callable[["EffectBase"], Any]

_frame_id_counter = itertools.count(1)


def _next_frame_id() -> int:
    return next(_frame_id_counter)


@dataclass(frozen=True)
class ReturnFrame:
    generator: Generator[Any, Any, Any]
    frame_id: int = field(default_factory=_next_frame_id, compare=False)


@dataclass(frozen=True)
class HandlerFrame:
    handler: Handler
    frame_id: int = field(default_factory=_next_frame_id, compare=False)


@dataclass
class LabelFrame:
    """A labelled scope. Counts atom occurrences to assign segment ordinals."""

    scope: Path = ROOT
    counters: dict[Atom, int] = field(default_factory=dict)
    frame_id: int = field(default_factory=_next_frame_id, compare=False)

    def next_index(self, atom: Atom) -> int:
        index = self.counters.get(atom, 0)
        self.counters[atom] = index + 1
        return index

    def child(self, atom: Atom, index: int | None = None) -> Path:
        if index is None:
            index = self.next_index(atom)
        return self.scope + (Segment(atom, index),)


@dataclass(frozen=True)
class DispatchFrame:
    """Marks a running handler body.

    Effects performed above this frame skip every handler up to and including
    the one that owns the dispatch.
    """

    effect: EffectBase
    owner_id: int
    frame_id: int = field(default_factory=_next_frame_id, compare=False)


Frame = ReturnFrame | HandlerFrame | LabelFrame | DispatchFrame
Kontinuation = list[Frame]

__all__ = [
    "DispatchFrame",
    "Frame",
    "Handler",
    "HandlerFrame",
    "Kontinuation",
    "LabelFrame",
    "ReturnFrame",
]
