from __future__ import annotations

from typing import Any

from effcheck.effects import SampleEffect
from effcheck.path import Path
from effcheck.recording import Recording
from effcheck.strategies.base import StrategyHandler


class ShrinkStrategy(StrategyHandler):
    """Replays ``base`` with ``candidate`` substituted at ``path``.

    Paths the base recording never reached, or whose recorded value the
    domain no longer admits, get the domain origin.
    """

    name = "shrink"

    def __init__(
        self, base: Recording, path: Path, candidate: Any, size: int | None = None
    ) -> None:
        super().__init__(base.size if size is None else size)
        self.base = base
        self.path = path
        self.candidate = candidate

    def choose(self, effect: SampleEffect) -> Any:
        domain = effect.domain
        if effect.path == self.path and domain.contains(self.candidate):
            return self.candidate
        decision = self.base.get(effect.path)
        if decision is not None and domain.contains(decision.value):
            return decision.value
        return domain.origin()


__all__ = ["ShrinkStrategy"]
