"""
effcheck - property-based testing on top of an effect channel.

Generators are ``@do`` programs that yield Sample, Size and Succeed effects.
The runner answers those effects with a random, shrinking or replaying
strategy, so one generator expression serves all three.

Example:
    >>> from effcheck import do, gen, run
    >>>
    >>> @do
    >>> def pairs():
    ...     x = yield gen.integers(0, 100)
    ...     y = yield gen.integers(x, 100)
    ...     return (x, y)
    >>>
    >>> result = run(pairs(), lambda pair: pair[0] < 50)
    >>> result.value
    (50, 50)
"""

from loguru import logger

from effcheck import gen
from effcheck.atom import Atom, AtomInterner, intern, intern_ordinal
from effcheck.channel import (
    Abort,
    WithHandler,
    WithLabel,
    label,
    perform,
    run_program,
    with_handler,
)
from effcheck.config import RunConfig, linear_ramp
from effcheck.do import do
from effcheck.domains import Domain, Elements, FloatRange, IntRange, Presence, Weighted
from effcheck.effects import (
    EffectBase,
    Sample,
    SampleEffect,
    Size,
    SizeEffect,
    Succeed,
    SucceedEffect,
)
from effcheck.errors import (
    ConfigError,
    EffCheckError,
    PropertyFailedError,
    ReplayMismatchError,
    ReplayTokenError,
    StrategyError,
    UnhandledEffectError,
)
from effcheck.outcome import Outcome, OutcomeKind
from effcheck.path import Path, Segment, format_path
from effcheck.program import Program, ProgramBase
from effcheck.replay import ReplayToken
from effcheck.results import Aborted, AllPassed, Counterexample, GaveUp, RunResult
from effcheck.runner import Runner, RunnerState, check, run

logger.disable("effcheck")

__version__ = "0.1.0"

__all__ = [
    "Abort",
    "Aborted",
    "AllPassed",
    "Atom",
    "AtomInterner",
    "ConfigError",
    "Counterexample",
    "Domain",
    "EffCheckError",
    "EffectBase",
    "Elements",
    "FloatRange",
    "GaveUp",
    "IntRange",
    "Outcome",
    "OutcomeKind",
    "Path",
    "Presence",
    "Program",
    "ProgramBase",
    "PropertyFailedError",
    "ReplayMismatchError",
    "ReplayToken",
    "ReplayTokenError",
    "RunConfig",
    "RunResult",
    "Runner",
    "RunnerState",
    "Sample",
    "SampleEffect",
    "Segment",
    "Size",
    "SizeEffect",
    "StrategyError",
    "Succeed",
    "SucceedEffect",
    "UnhandledEffectError",
    "Weighted",
    "WithHandler",
    "WithLabel",
    "check",
    "do",
    "format_path",
    "gen",
    "intern",
    "intern_ordinal",
    "label",
    "linear_ramp",
    "perform",
    "run",
    "run_program",
    "with_handler",
]
