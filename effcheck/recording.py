from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from frozendict import frozendict

from effcheck.domains import Domain
from effcheck.path import Path, format_path
from effcheck.replay import ReplayToken


@dataclass(frozen=True)
class Decision:
    path: Path
    domain: Domain
    value: Any

    def __str__(self) -> str:
        return f"{format_path(self.path)}={self.value!r}"


@dataclass(frozen=True)
class Recording:
    """Decisions made during one trial, in program order, plus the size used."""

    size: int
    decisions: tuple[Decision, ...] = ()
    _index: Mapping[Path, Decision] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {d.path: d for d in self.decisions})

    def __len__(self) -> int:
        return len(self.decisions)

    def get(self, path: Path) -> Decision | None:
        return self._index.get(path)

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(d.path for d in self.decisions)

    def choices(self) -> frozendict[Path, Any]:
        return frozendict((d.path, d.domain.to_json(d.value)) for d in self.decisions)

    def to_token(self) -> ReplayToken:
        return ReplayToken(size=self.size, choices=self.choices())


class Recorder:
    """Mutable builder a strategy appends decisions to while a trial runs."""

    def __init__(self, size: int) -> None:
        self.size = size
        self._decisions: list[Decision] = []

    def record(self, path: Path, domain: Domain, value: Any) -> Any:
        self._decisions.append(Decision(path=path, domain=domain, value=value))
        return value

    def freeze(self) -> Recording:
        return Recording(size=self.size, decisions=tuple(self._decisions))


__all__ = ["Decision", "Recorder", "Recording"]
