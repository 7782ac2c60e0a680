"""
The trial-then-shrink loop.

``run`` samples values under :class:`RandomStrategy` with a growing size
budget until a trial fails, then hands the failing recording to the shrink
search, which re-runs the trial under :class:`ShrinkStrategy` with one
decision replaced at a time. With a replay token it runs exactly one trial
under :class:`ReplayStrategy` instead.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import replace
from enum import Enum
from typing import Any, TypeVar

from loguru import logger

from effcheck.config import RunConfig
from effcheck.do import do
from effcheck.errors import PropertyFailedError, StrategyError
from effcheck.gen.primitives import succeed_or_fail
from effcheck.outcome import Outcome, coerce_outcome
from effcheck.path import Path
from effcheck.program import Program, ProgramGenerator
from effcheck.recording import Recording
from effcheck.replay import ReplayToken
from effcheck.results import Aborted, AllPassed, Counterexample, GaveUp, RunResult
from effcheck.shrink.search import ShrinkSearch
from effcheck.strategies import (
    RandomStrategy,
    ReplayStrategy,
    ShrinkStrategy,
    StrategyHandler,
    Trial,
)

T = TypeVar("T")

Property = Callable[[Any], "bool | None | Outcome"]

logger = logger.bind(component="runner")


class RunnerState(Enum):
    IDLE = "idle"
    SAMPLING = "sampling"
    PASSED = "passed"
    FAILED = "failed"
    SHRINKING = "shrinking"
    SHRUNK = "shrunk"
    NO_SMALLER_FOUND = "no_smaller_found"
    ALL_PASSED = "all_passed"
    REPORTED = "reported"
    GAVE_UP = "gave_up"
    ABORTED = "aborted"


_TRANSITIONS: dict[RunnerState, frozenset[RunnerState]] = {
    RunnerState.IDLE: frozenset({RunnerState.SAMPLING}),
    RunnerState.SAMPLING: frozenset(
        {
            RunnerState.PASSED,
            RunnerState.FAILED,
            RunnerState.SAMPLING,
            RunnerState.ALL_PASSED,
            RunnerState.GAVE_UP,
            RunnerState.ABORTED,
        }
    ),
    RunnerState.PASSED: frozenset({RunnerState.SAMPLING, RunnerState.ALL_PASSED}),
    RunnerState.FAILED: frozenset({RunnerState.SHRINKING, RunnerState.REPORTED}),
    RunnerState.SHRINKING: frozenset(
        {RunnerState.SHRUNK, RunnerState.NO_SMALLER_FOUND, RunnerState.ABORTED}
    ),
    RunnerState.SHRUNK: frozenset({RunnerState.REPORTED}),
    RunnerState.NO_SMALLER_FOUND: frozenset({RunnerState.REPORTED}),
    RunnerState.ALL_PASSED: frozenset(),
    RunnerState.REPORTED: frozenset(),
    RunnerState.GAVE_UP: frozenset(),
    RunnerState.ABORTED: frozenset(),
}


def evaluate_property(prop: Property, value: Any) -> Outcome:
    try:
        return coerce_outcome(prop(value))
    except Exception as exc:
        return Outcome.failed(exc)


@do
def trial_program(
    generator: Program[T], prop: Property, witness: list[Any]
) -> ProgramGenerator[None]:
    """Generate a value, evaluate the property and report the outcome."""

    value = yield generator
    witness.append(value)
    yield succeed_or_fail(evaluate_property(prop, value))


class Runner:
    """Drives one run. Owns its strategies, machines and shrink trie."""

    def __init__(
        self,
        generator: Program[Any],
        prop: Property,
        config: RunConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.generator = generator
        self.prop = prop
        self.config = config or RunConfig()
        self.clock = clock
        self.state = RunnerState.IDLE
        self.history: list[RunnerState] = [RunnerState.IDLE]

    def _enter(self, state: RunnerState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid runner transition {self.state.name} -> {state.name}")
        self.state = state
        self.history.append(state)

    def _attempt(self, strategy: StrategyHandler) -> Trial:
        witness: list[Any] = []
        trial = strategy.run(trial_program(self.generator, self.prop, witness))
        return replace(trial, value=witness[-1] if witness else None)

    def run(self, replay: ReplayToken | None = None) -> RunResult:
        if self.state is not RunnerState.IDLE:
            raise RuntimeError("Runner instances are single-use")
        if replay is not None:
            return self._replay(replay)

        config = self.config
        deadline = None if config.deadline is None else self.clock() + config.deadline
        rng = random.Random(config.seed)
        trials_run = discarded = 0
        index = 0
        logger.debug(
            "run start: seed={} trials={} max_size={}",
            config.seed,
            config.trial_count,
            config.max_size,
        )
        self._enter(RunnerState.SAMPLING)

        while trials_run < config.trial_count:
            if deadline is not None and self.clock() >= deadline:
                logger.info("deadline reached after {} trials", trials_run)
                self._enter(RunnerState.ALL_PASSED)
                return AllPassed(trials_run=trials_run, discarded=discarded, interrupted=True)

            size = config.size_for(index)
            index += 1
            try:
                trial = self._attempt(RandomStrategy(rng, size))
            except StrategyError as exc:
                logger.info("run aborted: {}", exc)
                self._enter(RunnerState.ABORTED)
                return Aborted(error=exc, trials_run=trials_run)

            logger.debug("trial {} size={}: {}", index - 1, size, trial.outcome.describe())

            if trial.outcome.is_discard:
                discarded += 1
                if discarded > config.discard_limit:
                    logger.info("gave up after {} discards", discarded)
                    self._enter(RunnerState.GAVE_UP)
                    return GaveUp(trials_run=trials_run, discarded=discarded)
                self._enter(RunnerState.SAMPLING)
                continue

            trials_run += 1
            if trial.outcome.is_fail:
                self._enter(RunnerState.FAILED)
                logger.info(
                    "trial {} failed with {!r}: {}",
                    index - 1,
                    trial.value,
                    trial.outcome.describe(),
                )
                return self._shrink(trial, trials_run, deadline)

            self._enter(RunnerState.PASSED)
            if trials_run < config.trial_count:
                self._enter(RunnerState.SAMPLING)

        self._enter(RunnerState.ALL_PASSED)
        return AllPassed(trials_run=trials_run, discarded=discarded)

    def _shrink(self, failing: Trial, trials_run: int, deadline: float | None) -> RunResult:
        self._enter(RunnerState.SHRINKING)

        def evaluate(base: Recording, path: Path, candidate: Any) -> Trial:
            return self._attempt(ShrinkStrategy(base, path, candidate))

        search = ShrinkSearch(
            evaluate,
            max_evaluations=self.config.max_shrink_iterations,
            deadline=deadline,
            clock=self.clock,
        )
        try:
            result = search.run(failing)
        except StrategyError as exc:
            logger.info("shrinking aborted: {}", exc)
            self._enter(RunnerState.ABORTED)
            return Aborted(error=exc, trials_run=trials_run)

        self._enter(RunnerState.SHRUNK if result.steps else RunnerState.NO_SMALLER_FOUND)
        best = result.trial
        counterexample = Counterexample(
            value=best.value,
            reason=best.outcome.reason,
            replay=best.recording.to_token(),
            shrink_steps=result.steps,
            trials_run=trials_run,
            budget_limited=result.budget_limited,
            interrupted=result.interrupted,
            retained=result.retained,
        )
        self._enter(RunnerState.REPORTED)
        logger.info("counterexample after {} shrink steps: {!r}", result.steps, best.value)
        return counterexample

    def _replay(self, token: ReplayToken) -> RunResult:
        self._enter(RunnerState.SAMPLING)
        try:
            trial = self._attempt(ReplayStrategy(token))
        except StrategyError as exc:
            logger.info("replay aborted: {}", exc)
            self._enter(RunnerState.ABORTED)
            return Aborted(error=exc, trials_run=0)

        logger.debug("replayed trial: {}", trial.outcome.describe())
        if trial.outcome.is_discard:
            self._enter(RunnerState.GAVE_UP)
            return GaveUp(trials_run=0, discarded=1)
        if trial.outcome.is_pass:
            self._enter(RunnerState.PASSED)
            self._enter(RunnerState.ALL_PASSED)
            return AllPassed(trials_run=1)

        self._enter(RunnerState.FAILED)
        self._enter(RunnerState.REPORTED)
        return Counterexample(
            value=trial.value,
            reason=trial.outcome.reason,
            replay=trial.recording.to_token(),
            shrink_steps=0,
            trials_run=1,
        )


def run(
    generator: Program[T],
    prop: Property,
    config: RunConfig | None = None,
    replay: ReplayToken | None = None,
) -> RunResult:
    """Check ``prop`` against values of ``generator``.

    Returns ``AllPassed``, a shrunk ``Counterexample``, ``GaveUp`` when too
    many trials were discarded, or ``Aborted`` when a strategy failed.
    ``UnhandledEffectError`` is never caught.
    """

    return Runner(generator, prop, config).run(replay=replay)


def check(
    generator: Program[T],
    prop: Property,
    config: RunConfig | None = None,
    replay: ReplayToken | None = None,
) -> RunResult:
    """Like :func:`run`, but raise for counterexamples and aborted runs."""

    result = run(generator, prop, config, replay)
    if isinstance(result, Counterexample):
        raise PropertyFailedError(result)
    if isinstance(result, Aborted):
        raise result.error
    return result


__all__ = [
    "Property",
    "Runner",
    "RunnerState",
    "check",
    "evaluate_property",
    "run",
    "trial_program",
]
