"""Size effect: read the ambient size budget."""

from __future__ import annotations

from dataclasses import dataclass

from effcheck.effects.base import Effect, EffectBase


@dataclass(frozen=True)
class SizeEffect(EffectBase):
    """Asks for the current size budget, a non-negative integer."""


def size() -> SizeEffect:
    return SizeEffect()


def Size() -> Effect:
    return SizeEffect()


__all__ = ["Size", "SizeEffect", "size"]
