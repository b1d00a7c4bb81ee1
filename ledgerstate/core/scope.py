# ledgerstate/core/scope.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Scope patterns and the matcher that selects guards/callbacks for a transition.

Each side of a hook scope is either ANY (matches every state) or
Exactly(state). Matching is total: every pattern/state pair yields a bool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, TypeVar, Union

from ledgerstate.interfaces.types import StateName


class _AnyState:
    """Wildcard pattern; there is exactly one instance, ANY."""

    _instance: Optional["_AnyState"] = None

    def __new__(cls) -> "_AnyState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def matches(self, state: Optional[StateName]) -> bool:
        return True

    @property
    def state(self) -> None:
        return None

    def __repr__(self) -> str:
        return "ANY"


ANY = _AnyState()


@dataclass(frozen=True)
class Exactly:
    """Pattern matching a single named state."""

    name: StateName

    def matches(self, state: Optional[StateName]) -> bool:
        return state == self.name

    @property
    def state(self) -> StateName:
        return self.name


StatePattern = Union[_AnyState, Exactly]


def pattern_for(state: Optional[StateName]) -> StatePattern:
    """Build the pattern for an already-normalized state name; None means ANY."""
    return ANY if state is None else Exactly(state)


class Scoped(Protocol):
    from_pattern: StatePattern
    to_pattern: StatePattern


T = TypeVar("T", bound=Scoped)


def applies_to(entry: Scoped, from_state: Optional[StateName], to_state: Optional[StateName]) -> bool:
    """True if entry's scope covers the concrete (from_state, to_state) pair."""
    return entry.from_pattern.matches(from_state) and entry.to_pattern.matches(to_state)


def select_for(
    entries: Iterable[T], from_state: Optional[StateName], to_state: Optional[StateName]
) -> List[T]:
    """Return the entries that apply to (from_state, to_state), keeping their order."""
    return [entry for entry in entries if applies_to(entry, from_state, to_state)]
