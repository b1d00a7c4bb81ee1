# ledgerstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class StateMachineError(Exception):
    """
    Base exception class for errors raised by the ledgerstate engine.

    :param message: Human readable description.
    :param details: Optional structured context; defaults to an empty dict.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidStateError(StateMachineError):
    """
    Raised when a state name was never declared, or when a machine definition
    is built without an initial state.
    """

    def __init__(
        self,
        message: str,
        state: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.state = state


class InitialStateAlreadyDefinedError(InvalidStateError):
    """
    Raised when a second state is declared as initial.
    """

    def __init__(
        self,
        message: str,
        state: Optional[str] = None,
        existing: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, state, details)
        self.existing = existing


class InvalidTransitionError(StateMachineError):
    """
    Raised when a (from, to) pair is not an edge of the graph, either while
    scoping a hook or while attempting a transition at runtime.
    """

    def __init__(
        self,
        message: str,
        from_state: Optional[str] = None,
        to_state: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.from_state = from_state
        self.to_state = to_state


class GuardFailedError(StateMachineError):
    """
    Raised when a guard vetoes a transition. Guard actions may raise this
    themselves to attach a reason.
    """

    def __init__(
        self,
        message: str,
        from_state: Optional[str] = None,
        to_state: Optional[str] = None,
        guard: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.from_state = from_state
        self.to_state = to_state
        self.guard = guard


class ConfigurationError(StateMachineError):
    """
    Raised when library settings are given an unknown key or an unusable value.
    """

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.setting = setting
