from __future__ import annotations

from typing import Any

from effcheck.effects import SampleEffect
from effcheck.errors import ReplayMismatchError
from effcheck.path import format_path
from effcheck.replay import ReplayToken
from effcheck.strategies.base import StrategyHandler

_MISSING = object()


class ReplayStrategy(StrategyHandler):
    """Answers Samples from a replay token; the random seed is never consulted."""

    name = "replay"

    def __init__(self, token: ReplayToken) -> None:
        super().__init__(token.size)
        self.token = token

    def choose(self, effect: SampleEffect) -> Any:
        assert effect.path is not None
        domain = effect.domain
        raw = self.token.get(effect.path, _MISSING)
        if raw is _MISSING:
            return domain.origin()
        value = domain.from_json(raw)
        if not domain.contains(value):
            raise ReplayMismatchError(format_path(effect.path), raw, domain)
        return value


__all__ = ["ReplayStrategy"]
