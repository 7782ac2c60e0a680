"""
Run configuration.

``RunConfig`` is an immutable, beartype-checked record of everything that
steers one run: how many trials, how sizes grow between them, the seed, and
the shrink and discard budgets. ``RunConfig.from_env`` lets a CI job override
the defaults without touching test code.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from beartype import beartype

from effcheck.errors import ConfigError

SizeRamp = Callable[[int], int]

ENV_VARIABLES: dict[str, str] = {
    "EFFCHECK_SEED": "seed",
    "EFFCHECK_TRIALS": "trial_count",
    "EFFCHECK_MAX_SIZE": "max_size",
    "EFFCHECK_MAX_SHRINKS": "max_shrink_iterations",
    "EFFCHECK_DISCARD_RATIO": "max_discard_ratio",
}


def linear_ramp(initial: int, maximum: int) -> SizeRamp:
    """Size ``initial`` for the first trial, one more per trial, capped at ``maximum``."""

    def ramp(trial_index: int) -> int:
        return min(maximum, initial + trial_index)

    ramp.__name__ = f"linear_ramp({initial}, {maximum})"
    return ramp


@beartype
@dataclass(frozen=True)
class RunConfig:
    """
    Settings for one ``run``.

    Example:
        >>> config = RunConfig(trial_count=200, seed=42)
        >>> config.size_for(0), config.size_for(500)
        (0, 100)
    """

    trial_count: int = 100
    initial_size: int = 0
    max_size: int = 100
    size_ramp: SizeRamp | None = None
    seed: int = 0
    max_shrink_iterations: int = 1000
    max_discard_ratio: int | float = 10
    deadline: int | float | None = None

    def __post_init__(self) -> None:
        if self.trial_count < 1:
            raise ConfigError("trial_count", self.trial_count, "must be positive")
        if self.initial_size < 0:
            raise ConfigError("initial_size", self.initial_size, "must be non-negative")
        if self.max_size < self.initial_size:
            raise ConfigError(
                "max_size", self.max_size, f"must be at least initial_size={self.initial_size}"
            )
        if self.max_shrink_iterations < 1:
            raise ConfigError(
                "max_shrink_iterations", self.max_shrink_iterations, "must be positive"
            )
        if self.max_discard_ratio < 0:
            raise ConfigError("max_discard_ratio", self.max_discard_ratio, "must be non-negative")
        if self.deadline is not None and self.deadline <= 0:
            raise ConfigError("deadline", self.deadline, "must be a positive number of seconds")

    @property
    def discard_limit(self) -> int:
        return int(self.trial_count * self.max_discard_ratio)

    def size_for(self, trial_index: int) -> int:
        """Size budget for a trial, clamped to ``[0, max_size]``."""

        ramp = self.size_ramp or linear_ramp(self.initial_size, self.max_size)
        size = ramp(trial_index)
        if not isinstance(size, int) or isinstance(size, bool):
            raise ConfigError("size_ramp", self.size_ramp, f"returned {size!r}, not an int")
        return max(0, min(size, self.max_size))

    def with_overrides(self, **overrides: Any) -> RunConfig:
        return replace(self, **overrides)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> RunConfig:
        """Build a config from ``EFFCHECK_*`` variables; keyword overrides win."""

        environ = os.environ if environ is None else environ
        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for variable, name in ENV_VARIABLES.items():
            raw = environ.get(variable)
            if raw is None or raw.strip() == "":
                continue
            values[name] = _parse_number(name, raw, allow_float=name == "max_discard_ratio")
        for name in overrides:
            if name not in known:
                raise ConfigError(name, overrides[name], "unknown setting")
        values.update(overrides)
        return cls(**values)


def _parse_number(name: str, raw: str, *, allow_float: bool) -> int | float:
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        if allow_float:
            try:
                return float(text)
            except ValueError:
                pass
    raise ConfigError(name, raw, "expected a number" if allow_float else "expected an integer")


__all__ = ["ENV_VARIABLES", "RunConfig", "SizeRamp", "linear_ramp"]
