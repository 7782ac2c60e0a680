"""
Replay tokens.

A token is everything needed to regenerate one value without randomness:
the size budget of the trial and the value chosen at every decision path.
Tokens serialize to a small JSON document so an external harness can store
them next to a failing test.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from frozendict import frozendict

from effcheck.errors import ReplayTokenError
from effcheck.path import Path, format_path, path_from_json, path_to_json

TOKEN_VERSION = 1


@dataclass(frozen=True)
class ReplayToken:
    size: int
    choices: frozendict[Path, Any] = field(default_factory=frozendict)

    def __post_init__(self) -> None:
        if not isinstance(self.choices, frozendict):
            object.__setattr__(self, "choices", frozendict(self.choices))

    def __len__(self) -> int:
        return len(self.choices)

    def get(self, path: Path, default: Any = None) -> Any:
        return self.choices.get(path, default)

    def describe(self) -> str:
        inner = ", ".join(f"{format_path(p)}={v!r}" for p, v in self.choices.items())
        return f"size={self.size} {{{inner}}}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": TOKEN_VERSION,
            "size": self.size,
            "choices": [[path_to_json(p), v] for p, v in self.choices.items()],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ReplayToken:
        if not isinstance(raw, Mapping):
            raise ReplayTokenError(f"replay token must be an object, got {type(raw).__name__}")
        version = raw.get("version", TOKEN_VERSION)
        if version != TOKEN_VERSION:
            raise ReplayTokenError(f"unsupported replay token version {version!r}")
        size = raw.get("size")
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise ReplayTokenError(f"replay token size must be a non-negative int, got {size!r}")
        entries = raw.get("choices", [])
        if not isinstance(entries, list):
            raise ReplayTokenError("replay token choices must be a list")
        choices: dict[Path, Any] = {}
        for entry in entries:
            if not isinstance(entry, list) or len(entry) != 2:
                raise ReplayTokenError(f"replay choice must be [path, value], got {entry!r}")
            try:
                path = path_from_json(entry[0])
            except (TypeError, ValueError) as exc:
                raise ReplayTokenError(f"malformed path {entry[0]!r}: {exc}") from exc
            choices[path] = entry[1]
        return cls(size=size, choices=frozendict(choices))

    @classmethod
    def from_json(cls, text: str | bytes) -> ReplayToken:
        try:
            raw = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ReplayTokenError(f"replay token is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise ReplayTokenError("replay token is nested too deeply") from exc
        return cls.from_dict(raw)


__all__ = ["TOKEN_VERSION", "ReplayToken"]
