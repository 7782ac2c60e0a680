"""Trial outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeKind(Enum):
    PASSED = "passed"
    FAILED = "failed"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class Outcome:
    """Result of one trial: pass, fail with a reason, or discard."""

    kind: OutcomeKind
    reason: Any = None

    @staticmethod
    def passed() -> Outcome:
        return _PASSED

    @staticmethod
    def failed(reason: Any = None) -> Outcome:
        return Outcome(OutcomeKind.FAILED, reason)

    @staticmethod
    def discarded(reason: Any = None) -> Outcome:
        return Outcome(OutcomeKind.DISCARDED, reason)

    @property
    def is_pass(self) -> bool:
        return self.kind is OutcomeKind.PASSED

    @property
    def is_fail(self) -> bool:
        return self.kind is OutcomeKind.FAILED

    @property
    def is_discard(self) -> bool:
        return self.kind is OutcomeKind.DISCARDED

    def describe(self) -> str:
        if self.reason is None:
            return self.kind.value
        if isinstance(self.reason, BaseException):
            return f"{self.kind.value}: {type(self.reason).__name__}: {self.reason}"
        return f"{self.kind.value}: {self.reason}"


_PASSED = Outcome(OutcomeKind.PASSED)


def coerce_outcome(result: Any) -> Outcome:
    """Interpret a property's return value.

    ``None`` and ``True`` pass, ``False`` fails, an :class:`Outcome` is taken
    as is. Anything else is a programming error in the property.
    """

    if isinstance(result, Outcome):
        return result
    if result is None or result is True:
        return _PASSED
    if result is False:
        return Outcome.failed("property returned False")
    raise TypeError(
        f"property must return None, bool or Outcome, got {type(result).__name__}"
    )


__all__ = ["Outcome", "OutcomeKind", "coerce_outcome"]
