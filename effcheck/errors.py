from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from effcheck.effects.base import EffectBase
    from effcheck.results import Counterexample


class EffCheckError(Exception):
    """Base class for errors raised by effcheck itself."""


class UnhandledEffectError(EffCheckError):
    """Raised when an effect is performed with no handler installed.

    This is a composition bug: generator code ran outside every strategy's
    ``WithHandler`` scope. It is never delivered to generator code and always
    propagates to the caller of ``run``.
    """

    def __init__(self, effect: EffectBase) -> None:
        self.effect = effect
        super().__init__(
            f"No handler for {type(effect).__name__}\n"
            "Hint: generators must run under a strategy, e.g. `run(generator, property)`, "
            "or inside `WithHandler(handler, program)`"
        )


class ConfigError(EffCheckError, ValueError):
    """Raised when a run configuration is invalid."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class StrategyError(EffCheckError):
    """Raised when a strategy handler cannot answer an effect."""


class ReplayMismatchError(StrategyError):
    """Raised when a replay token does not fit the generator being replayed."""

    def __init__(self, path_text: str, value: Any, domain: Any) -> None:
        self.path_text = path_text
        self.value = value
        self.domain = domain
        super().__init__(
            f"Recorded value {value!r} at {path_text} is not in {domain!r}\n"
            "Hint: the replay token was produced by a different generator"
        )


class ReplayTokenError(EffCheckError, ValueError):
    """Raised when a serialized replay token cannot be decoded."""


class PropertyFailedError(EffCheckError, AssertionError):
    """Raised by ``check`` when a counterexample is found."""

    def __init__(self, counterexample: Counterexample) -> None:
        self.counterexample = counterexample
        super().__init__(counterexample.describe())


__all__ = [
    "ConfigError",
    "EffCheckError",
    "PropertyFailedError",
    "ReplayMismatchError",
    "ReplayTokenError",
    "StrategyError",
    "UnhandledEffectError",
]
