"""
Prefix tree over decision paths, owned by one shrink search.

Nodes live in a single arena list and refer to each other by integer
handles. Each node keeps the candidates already evaluated at its path, the
value the latest adopted recording holds there, and an exhausted flag.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from effcheck.path import Path, Segment, format_path

if TYPE_CHECKING:
    from effcheck.recording import Recording

_UNSET: Any = object()


@dataclass
class TrieNode:
    parent: int | None
    segment: Segment | None
    children: dict[Segment, int] = field(default_factory=dict)
    tried: set[Any] = field(default_factory=set)
    value: Any = _UNSET
    exhausted: bool = False
    exhausted_at: Any = _UNSET


@dataclass(frozen=True)
class RetainedPath:
    """A path copied out of the trie once the search that owned it is over."""

    path: Path
    value: Any
    tried: frozenset[Any]
    exhausted: bool

    def __str__(self) -> str:
        return f"{format_path(self.path)}={self.value!r}"


class ShrinkTrie:
    ROOT_HANDLE = 0

    def __init__(self) -> None:
        self._nodes: list[TrieNode] = [TrieNode(parent=None, segment=None)]
        self._adopted: dict[Path, Any] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, handle: int) -> TrieNode:
        return self._nodes[handle]

    def find(self, path: Path) -> int | None:
        handle = self.ROOT_HANDLE
        for segment in path:
            child = self._nodes[handle].children.get(segment)
            if child is None:
                return None
            handle = child
        return handle

    def insert(self, path: Path) -> int:
        handle = self.ROOT_HANDLE
        for segment in path:
            node = self._nodes[handle]
            child = node.children.get(segment)
            if child is None:
                child = len(self._nodes)
                self._nodes.append(TrieNode(parent=handle, segment=segment))
                node.children[segment] = child
            handle = child
        return handle

    def mark_tried(self, path: Path, candidate: Any) -> None:
        self._nodes[self.insert(path)].tried.add(candidate)

    def was_tried(self, path: Path, candidate: Any) -> bool:
        handle = self.find(path)
        return handle is not None and candidate in self._nodes[handle].tried

    def is_exhausted(self, path: Path) -> bool:
        """True when the node at ``path`` or any of its ancestors is exhausted."""

        handle: int | None = self.ROOT_HANDLE
        if self._nodes[self.ROOT_HANDLE].exhausted:
            return True
        for segment in path:
            handle = self._nodes[handle].children.get(segment)
            if handle is None:
                return False
            if self._nodes[handle].exhausted:
                return True
        return False

    def mark_exhausted(self, path: Path, value: Any = _UNSET) -> None:
        handle: int | None = self.insert(path)
        node = self._nodes[handle]
        node.exhausted = True
        node.exhausted_at = node.value if value is _UNSET else value
        handle = node.parent
        while handle is not None:
            parent = self._nodes[handle]
            if parent.exhausted or not all(
                self._nodes[c].exhausted for c in parent.children.values()
            ):
                break
            parent.exhausted = True
            handle = parent.parent

    def next_untried(self, path: Path, candidates: Iterable[Any]) -> Any | None:
        handle = self.find(path)
        tried = self._nodes[handle].tried if handle is not None else ()
        for candidate in candidates:
            if candidate not in tried:
                return candidate
        return None

    def refresh(self, recording: Recording) -> None:
        """Bring the trie in line with a newly adopted recording.

        A tried candidate stands for the whole input it was evaluated on, so
        it stays valid only while every other decision keeps its value. When
        exactly one path changed, that path keeps its tried set; any wider
        change forgets all of them. Exhaustion is reset on every change.
        """

        current = {d.path: d.value for d in recording.decisions}
        changed = [
            path
            for path, value in current.items()
            if path not in self._adopted or self._adopted[path] != value
        ]
        changed.extend(path for path in self._adopted if path not in current)
        for path, value in current.items():
            self._nodes[self.insert(path)].value = value
        self._adopted = current
        if not changed:
            return

        keep = self.find(changed[0]) if len(changed) == 1 else None
        for handle, node in enumerate(self._nodes):
            node.exhausted = False
            node.exhausted_at = _UNSET
            if handle != keep:
                node.tried.clear()

    def retain(self, path: Path) -> RetainedPath:
        handle = self.find(path)
        if handle is None:
            raise KeyError(format_path(path))
        node = self._nodes[handle]
        return RetainedPath(
            path=path,
            value=None if node.value is _UNSET else node.value,
            tried=frozenset(node.tried),
            exhausted=node.exhausted,
        )


__all__ = ["RetainedPath", "ShrinkTrie", "TrieNode"]
