"""Sample effect: ask the active strategy for a value of a domain."""

from __future__ import annotations

from dataclasses import dataclass

from effcheck.atom import Atom, as_atom
from effcheck.domains import Domain
from effcheck.effects.base import Effect, EffectBase

DEFAULT_LABEL = "sample"


@dataclass(frozen=True)
class SampleEffect(EffectBase):
    """Requests one value of ``domain``; ``label`` names the decision in its path."""

    domain: Domain
    label: Atom

    def __post_init__(self) -> None:
        if not isinstance(self.domain, Domain):
            raise TypeError(f"domain must be a Domain, got {type(self.domain).__name__}")
        if not isinstance(self.label, Atom):
            raise TypeError(f"label must be an Atom, got {type(self.label).__name__}")

    def address_atom(self) -> Atom:
        return self.label


def sample(domain: Domain, label: Atom | str | int | None = None) -> SampleEffect:
    return SampleEffect(domain=domain, label=as_atom(DEFAULT_LABEL if label is None else label))


def Sample(domain: Domain, label: Atom | str | int | None = None) -> Effect:
    return sample(domain, label)


__all__ = ["DEFAULT_LABEL", "Sample", "SampleEffect", "sample"]
