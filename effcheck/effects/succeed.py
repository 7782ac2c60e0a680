"""Succeed effect: report a trial outcome and end the trial."""

from __future__ import annotations

from dataclasses import dataclass

from effcheck.effects.base import Effect, EffectBase
from effcheck.outcome import Outcome


@dataclass(frozen=True)
class SucceedEffect(EffectBase):
    """Reports ``outcome``. Strategies answer it by aborting the trial."""

    outcome: Outcome

    def __post_init__(self) -> None:
        if not isinstance(self.outcome, Outcome):
            raise TypeError(f"outcome must be an Outcome, got {type(self.outcome).__name__}")


def succeed(outcome: Outcome) -> SucceedEffect:
    return SucceedEffect(outcome=outcome)


def Succeed(outcome: Outcome) -> Effect:
    return SucceedEffect(outcome=outcome)


__all__ = ["Succeed", "SucceedEffect", "succeed"]
