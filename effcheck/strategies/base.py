"""
Strategy handlers.

A strategy is a handler object installed around one trial. It answers Size
with its fixed budget, turns Succeed into an ``Abort`` carrying the outcome,
and leaves the choice of Sample values to subclasses. Every answered Sample
is recorded so the trial can be shrunk or replayed later.

Instances are single-use: create one per trial.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from loguru import logger

from effcheck.channel import Abort, WithHandler, run_program
from effcheck.effects import EffectBase, SampleEffect, SizeEffect, SucceedEffect
from effcheck.errors import EffCheckError, StrategyError
from effcheck.outcome import Outcome
from effcheck.path import format_path
from effcheck.program import ProgramBase
from effcheck.recording import Recorder, Recording

logger = logger.bind(component="strategy")


@dataclass(frozen=True)
class Trial:
    """What one run of a trial program under a strategy produced."""

    outcome: Outcome
    recording: Recording
    value: Any = None


class StrategyHandler(ABC):
    name = "strategy"

    def __init__(self, size: int) -> None:
        if size < 0:
            raise StrategyError(f"size budget must be non-negative, got {size}")
        self.size = size
        self.recorder = Recorder(size)
        self.outcome: Outcome | None = None
        self.error: StrategyError | None = None

    def __call__(self, effect: EffectBase) -> Any:
        if isinstance(effect, SampleEffect):
            return self._sample(effect)
        if isinstance(effect, SizeEffect):
            return self.size
        if isinstance(effect, SucceedEffect):
            self.outcome = effect.outcome
            return Abort(effect.outcome)
        return effect

    def _sample(self, effect: SampleEffect) -> Any:
        domain = effect.domain
        assert effect.path is not None
        if domain.is_empty():
            self.outcome = Outcome.discarded(f"empty domain at {format_path(effect.path)}")
            return Abort(self.outcome)
        try:
            value = self.choose(effect)
        except StrategyError as exc:
            self.error = exc
            raise
        except Exception as exc:
            self.error = StrategyError(
                f"{self.name} could not choose a value for {domain!r} "
                f"at {format_path(effect.path)}: {exc}"
            )
            raise self.error from exc
        if not domain.contains(value):
            self.error = StrategyError(
                f"{self.name} chose {value!r} outside {domain!r} at {format_path(effect.path)}"
            )
            raise self.error
        return self.recorder.record(effect.path, domain, value)

    @abstractmethod
    def choose(self, effect: SampleEffect) -> Any:
        """Pick the answer to a Sample whose domain is non-empty."""

    def run(self, program: ProgramBase[Any]) -> Trial:
        try:
            result = run_program(WithHandler(self, program))
        except EffCheckError:
            raise
        except Exception as exc:
            logger.debug("{} trial raised {!r}", self.name, exc)
            result = Outcome.failed(exc)
        if self.error is not None:
            raise self.error
        if isinstance(result, Outcome):
            outcome = result
        elif self.outcome is not None:
            outcome = self.outcome
        else:
            outcome = Outcome.passed()
        return Trial(outcome=outcome, recording=self.recorder.freeze())


__all__ = ["StrategyHandler", "Trial"]
