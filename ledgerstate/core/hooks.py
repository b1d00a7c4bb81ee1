# ledgerstate/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ledgerstate.core.errors import GuardFailedError
from ledgerstate.core.scope import ANY, StatePattern
from ledgerstate.interfaces.types import CallbackAction, GuardAction, StateName


def _action_name(action: Any) -> str:
    return getattr(action, "__qualname__", None) or repr(action)


@dataclass(frozen=True)
class Callback:
    """
    A before/after hook scoped to a (from, to) pattern pair. The action is
    invoked with the subject and its return value is ignored.
    """

    action: CallbackAction
    from_pattern: StatePattern = ANY
    to_pattern: StatePattern = ANY

    @property
    def from_state(self) -> Optional[StateName]:
        return self.from_pattern.state

    @property
    def to_state(self) -> Optional[StateName]:
        return self.to_pattern.state

    @property
    def name(self) -> str:
        return _action_name(self.action)

    def call(self, subject: Any) -> None:
        self.action(subject)


@dataclass(frozen=True)
class Guard(Callback):
    """
    A callback whose result decides whether a transition may proceed.

    The action rejects by returning a falsy value or by raising
    GuardFailedError. Any other exception is not a rejection and propagates
    to the caller untouched.
    """

    action: GuardAction

    def call(self, subject: Any, from_state: Optional[StateName] = None, to_state: Optional[StateName] = None) -> None:
        """
        Evaluate the guard against subject.

        :raises GuardFailedError: If the action returns a falsy value. The
            error carries the attempted from/to states and this guard.
        """
        if not self.action(subject):
            raise GuardFailedError(
                f"Guard {self.name} rejected transition from '{from_state}' to '{to_state}'",
                from_state=from_state,
                to_state=to_state,
                guard=self,
            )
