from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from effcheck.path import Path, format_path, path_to_json
from effcheck.replay import ReplayToken
from effcheck.shrink.trie import RetainedPath


@dataclass(frozen=True)
class AllPassed:
    trials_run: int
    discarded: int = 0
    interrupted: bool = False

    @property
    def is_ok(self) -> bool:
        return True

    def describe(self) -> str:
        text = f"OK, passed {self.trials_run} trials"
        if self.discarded:
            text += f" ({self.discarded} discarded)"
        if self.interrupted:
            text += ", stopped at the deadline"
        return text


@dataclass(frozen=True)
class Counterexample:
    """A failing value, as small as the shrink search could make it."""

    value: Any
    reason: Any
    replay: ReplayToken
    shrink_steps: int
    trials_run: int
    budget_limited: bool = False
    interrupted: bool = False
    retained: tuple[RetainedPath, ...] = ()

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def path(self) -> tuple[Path, ...]:
        """Decision paths of the counterexample, in program order."""

        if self.retained:
            return tuple(r.path for r in self.retained)
        return tuple(self.replay.choices)

    def path_json(self) -> list[list[list[Any]]]:
        return [path_to_json(p) for p in self.path]

    def describe(self) -> str:
        lines = [
            f"Falsified after {self.trials_run} trials and {self.shrink_steps} shrink steps",
            f"Counterexample: {self.value!r}",
        ]
        if self.reason is not None:
            if isinstance(self.reason, BaseException):
                lines.append(f"Reason: {type(self.reason).__name__}: {self.reason}")
            else:
                lines.append(f"Reason: {self.reason}")
        if self.budget_limited:
            lines.append("Shrinking stopped early; a smaller counterexample may exist")
        if self.path:
            lines.append("Decisions: " + ", ".join(format_path(p) for p in self.path))
        lines.append(f"Replay: {self.replay.to_json()}")
        return "\n".join(lines)


@dataclass(frozen=True)
class GaveUp:
    trials_run: int
    discarded: int

    @property
    def is_ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"Gave up after {self.trials_run} trials and {self.discarded} discards"


@dataclass(frozen=True)
class Aborted:
    error: BaseException
    trials_run: int

    @property
    def is_ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"Aborted after {self.trials_run} trials: {type(self.error).__name__}: {self.error}"


RunResult = AllPassed | Counterexample | GaveUp | Aborted

__all__ = ["Aborted", "AllPassed", "Counterexample", "GaveUp", "RunResult"]
