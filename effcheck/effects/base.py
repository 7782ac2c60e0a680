"""
Base class for effcheck effects.

An effect is a request that generator code issues by yielding it. Effects are
frozen dataclasses; the channel stamps each one with the path of the decision
point that performed it before handing it to a handler.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from effcheck.atom import Atom, intern
from effcheck.path import Path
from effcheck.program import ProgramBase, ProgramGenerator


@dataclass(frozen=True)
class EffectBase(ProgramBase[Any]):
    """Base class for all effects. Effects are programs that perform themselves."""

    path: Path | None = field(default=None, kw_only=True, compare=False)

    @property
    def is_addressed(self) -> bool:
        return self.path is not None

    def address_atom(self) -> Atom:
        return intern(type(self).__name__)

    def addressed(self, path: Path) -> EffectBase:
        return replace(self, path=path)

    def to_generator(self) -> ProgramGenerator[Any]:
        answer = yield self
        return answer


Effect = EffectBase

__all__ = ["Effect", "EffectBase"]
