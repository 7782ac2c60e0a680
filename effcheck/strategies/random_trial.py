from __future__ import annotations

import random
from typing import Any

from effcheck.effects import SampleEffect
from effcheck.strategies.base import StrategyHandler


class RandomStrategy(StrategyHandler):
    """Answers every Sample with a random draw from its domain."""

    name = "random"

    def __init__(self, rng: random.Random, size: int) -> None:
        super().__init__(size)
        self.rng = rng

    def choose(self, effect: SampleEffect) -> Any:
        return effect.domain.draw(self.rng, self.size)


__all__ = ["RandomStrategy"]
