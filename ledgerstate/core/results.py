# ledgerstate/core/results.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Outcome of a transition attempt.

A transition either commits (Ok), is refused by the rules of the machine
(GuardRejected, Forbidden), or breaks (Failed). Refusals are expected and
can be answered with False; failures always surface as the original
exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ledgerstate.core.errors import GuardFailedError, InvalidTransitionError
from ledgerstate.interfaces.types import StateName


@dataclass(frozen=True)
class Ok:
    from_state: Optional[StateName]
    to_state: StateName

    @property
    def refused(self) -> bool:
        return False

    def unwrap(self) -> StateName:
        return self.to_state


@dataclass(frozen=True)
class GuardRejected:
    """A guard vetoed the transition; nothing ran after it."""

    error: GuardFailedError

    @property
    def refused(self) -> bool:
        return True

    def unwrap(self) -> StateName:
        raise self.error


@dataclass(frozen=True)
class Forbidden:
    """The (from, to) pair is not an edge of the graph."""

    error: InvalidTransitionError

    @property
    def refused(self) -> bool:
        return True

    def unwrap(self) -> StateName:
        raise self.error


@dataclass(frozen=True)
class Failed:
    """A guard, callback or the storage adapter raised unexpectedly."""

    cause: Exception

    @property
    def refused(self) -> bool:
        return False

    def unwrap(self) -> StateName:
        raise self.cause


TransitionResult = Union[Ok, GuardRejected, Forbidden, Failed]
