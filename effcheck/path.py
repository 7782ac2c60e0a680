"""Decision-point addresses.

A path is the sequence of ``(atom, index)`` segments leading from the root of
a generator execution to one decision point. The channel assigns them; the
shrink trie and replay tokens are keyed by them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple, TypeAlias

from effcheck.atom import Atom, intern


class Segment(NamedTuple):
    atom: Atom
    index: int

    def __str__(self) -> str:
        return f"{self.atom.text}#{self.index}"


Path: TypeAlias = tuple[Segment, ...]

ROOT: Path = ()


def make_path(pairs: Iterable[tuple[Atom | str, int]]) -> Path:
    segments = []
    for label, index in pairs:
        atom = label if isinstance(label, Atom) else intern(label)
        segments.append(Segment(atom, int(index)))
    return tuple(segments)


def path_to_json(path: Path) -> list[list[Any]]:
    return [[segment.atom.text, segment.index] for segment in path]


def path_from_json(raw: Sequence[Sequence[Any]]) -> Path:
    segments = []
    for item in raw:
        if len(item) != 2:
            raise ValueError(f"path segment must be [text, index], got {item!r}")
        text, index = item
        if not isinstance(text, str) or not isinstance(index, int) or isinstance(index, bool):
            raise ValueError(f"path segment must be [str, int], got {item!r}")
        segments.append(Segment(intern(text), index))
    return tuple(segments)


def format_path(path: Path) -> str:
    if not path:
        return "<root>"
    return "/".join(str(segment) for segment in path)


def is_prefix(prefix: Path, path: Path) -> bool:
    return len(prefix) <= len(path) and path[: len(prefix)] == prefix


__all__ = [
    "Path",
    "ROOT",
    "Segment",
    "format_path",
    "is_prefix",
    "make_path",
    "path_from_json",
    "path_to_json",
]
