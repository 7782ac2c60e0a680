"""Interned call-site labels.

An :class:`Atom` is the identity of a generator call site. Interning the same
text twice returns the same object, so atoms compare by identity and hash by
the integer slot they were assigned at creation, independent of text length.

The registry is append-only and lives for the whole process. Lookups read the
index without locking; insertions are serialized so that concurrent runs on
different threads never mint two atoms for the same text.
"""

from __future__ import annotations

import threading
from typing import Final


class Atom:
    """An interned label. Only :class:`AtomInterner` creates atoms."""

    __slots__ = ("text", "slot", "__weakref__")

    def __init__(self, text: str, slot: int) -> None:
        self.text = text
        self.slot = slot

    def __hash__(self) -> int:
        return self.slot

    def __eq__(self, other: object) -> bool:
        return self is other

    def __reduce__(self) -> tuple[object, tuple[str]]:
        # Unpickling re-interns so identity survives process boundaries.
        return (intern, (self.text,))

    def __repr__(self) -> str:
        return f"Atom({self.text!r})"

    def __str__(self) -> str:
        return self.text


class AtomInterner:
    """Text to :class:`Atom` registry."""

    def __init__(self) -> None:
        self._index: dict[str, Atom] = {}
        self._atoms: list[Atom] = []
        self._lock = threading.Lock()

    def intern(self, text: str) -> Atom:
        if not isinstance(text, str):
            raise TypeError(f"atom text must be str, got {type(text).__name__}")
        atom = self._index.get(text)
        if atom is not None:
            return atom
        with self._lock:
            atom = self._index.get(text)
            if atom is None:
                atom = Atom(text, len(self._atoms))
                self._atoms.append(atom)
                self._index[text] = atom
            return atom

    def lookup(self, text: str) -> Atom | None:
        return self._index.get(text)

    def __len__(self) -> int:
        return len(self._atoms)

    def __contains__(self, text: object) -> bool:
        return text in self._index


_DEFAULT_INTERNER: Final = AtomInterner()


def default_interner() -> AtomInterner:
    return _DEFAULT_INTERNER


def intern(text: str) -> Atom:
    """Intern ``text`` in the process-wide registry."""

    return _DEFAULT_INTERNER.intern(text)


def intern_ordinal(number: int) -> Atom:
    """Atom for an automatically assigned ordinal label."""

    if number < 0:
        raise ValueError(f"ordinal must be non-negative, got {number}")
    return _DEFAULT_INTERNER.intern(f"#{number}")


def as_atom(label: Atom | str | int) -> Atom:
    if isinstance(label, Atom):
        return label
    if isinstance(label, bool):
        raise TypeError("bool is not a valid label")
    if isinstance(label, int):
        return intern_ordinal(label)
    return intern(label)


__all__ = [
    "Atom",
    "AtomInterner",
    "as_atom",
    "default_interner",
    "intern",
    "intern_ordinal",
]
