"""
Shrink search.

Depth-first, first-failing commit: decisions of the current best recording
are visited in program order; at each one the trie supplies the next
untried candidate, which is marked tried before it is evaluated. The first
candidate that still fails is adopted and the walk restarts from the first
decision. Adopting a recording forgets the candidates tried at every other
decision, so the result is a local minimum: no single candidate at any
decision still fails. An input identical to one already evaluated is skipped.
A decision with no candidates left is marked exhausted. The search
ends when a full walk adopts nothing, or when the evaluation budget or the
deadline runs out.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger

from effcheck.path import Path, format_path
from effcheck.shrink.numeric import shrink_candidates
from effcheck.shrink.trie import RetainedPath, ShrinkTrie

if TYPE_CHECKING:
    from effcheck.recording import Decision, Recording
    from effcheck.strategies.base import Trial

logger = logger.bind(component="shrink")

Evaluate = Callable[["Recording", Path, Any], "Trial"]


@dataclass(frozen=True)
class ShrinkResult:
    trial: Trial
    steps: int
    evaluations: int
    budget_limited: bool
    interrupted: bool
    retained: tuple[RetainedPath, ...]


class _BudgetSpent(Exception):
    def __init__(self, interrupted: bool) -> None:
        self.interrupted = interrupted


def _input_key(base: Recording, decision: Decision, candidate: Any) -> tuple[int, Any]:
    """The full input a substitution runs on: size plus every recorded choice."""

    return (base.size, base.choices().set(decision.path, decision.domain.to_json(candidate)))


class ShrinkSearch:
    def __init__(
        self,
        evaluate: Evaluate,
        *,
        max_evaluations: int,
        deadline: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.evaluate = evaluate
        self.max_evaluations = max_evaluations
        self.deadline = deadline
        self.clock = clock
        self.trie = ShrinkTrie()
        self.evaluations = 0
        self.steps = 0
        self._evaluated: set[tuple[int, Any]] = set()

    def run(self, failing: Trial) -> ShrinkResult:
        best = failing
        self.trie.refresh(best.recording)
        budget_limited = interrupted = False
        try:
            while True:
                adopted = self._walk(best)
                if adopted is None:
                    break
                best = adopted
                self.steps += 1
                self.trie.refresh(best.recording)
                logger.debug(
                    "shrink step {}: {}",
                    self.steps,
                    ", ".join(str(d) for d in best.recording.decisions),
                )
        except _BudgetSpent as spent:
            budget_limited = True
            interrupted = spent.interrupted

        logger.info(
            "shrink finished after {} steps and {} evaluations{}",
            self.steps,
            self.evaluations,
            " (budget limited)" if budget_limited else "",
        )
        retained = tuple(self.trie.retain(d.path) for d in best.recording.decisions)
        return ShrinkResult(
            trial=best,
            steps=self.steps,
            evaluations=self.evaluations,
            budget_limited=budget_limited,
            interrupted=interrupted,
            retained=retained,
        )

    def _walk(self, best: Trial) -> Trial | None:
        for decision in best.recording.decisions:
            if self.trie.is_exhausted(decision.path):
                continue
            adopted = self._shrink_decision(best.recording, decision)
            if adopted is not None:
                return adopted
        return None

    def _shrink_decision(self, base: Recording, decision: Decision) -> Trial | None:
        candidates = shrink_candidates(decision.value, decision.domain)
        while True:
            candidate = self.trie.next_untried(decision.path, candidates)
            if candidate is None:
                self.trie.mark_exhausted(decision.path, decision.value)
                return None
            key = _input_key(base, decision, candidate)
            if key in self._evaluated:
                self.trie.mark_tried(decision.path, candidate)
                continue
            self._check_budget()
            self.trie.mark_tried(decision.path, candidate)
            self._evaluated.add(key)
            self.evaluations += 1
            attempt = self.evaluate(base, decision.path, candidate)
            logger.debug(
                "candidate {}={!r}: {}",
                format_path(decision.path),
                candidate,
                attempt.outcome.describe(),
            )
            if attempt.outcome.is_fail:
                return attempt

    def _check_budget(self) -> None:
        if self.evaluations >= self.max_evaluations:
            raise _BudgetSpent(interrupted=False)
        if self.deadline is not None and self.clock() >= self.deadline:
            raise _BudgetSpent(interrupted=True)


def shrink(
    failing: Trial,
    evaluate: Evaluate,
    *,
    max_evaluations: int,
    deadline: float | None = None,
) -> ShrinkResult:
    return ShrinkSearch(evaluate, max_evaluations=max_evaluations, deadline=deadline).run(
        failing
    )


__all__ = ["Evaluate", "ShrinkResult", "ShrinkSearch", "shrink"]
