"""
Core package providing the transition engine.

Architecture:
- MachineBuilder declares states, transitions and hooks, validating each
  declaration immediately
- MachineDefinition is the frozen result, shared by every Machine
- Machine binds a subject to a definition and a storage adapter and runs the
  guard -> before -> persist -> after pipeline
- scope selects the hooks that apply to a concrete (from, to) pair
"""

from .errors import (
    ConfigurationError,
    GuardFailedError,
    InitialStateAlreadyDefinedError,
    InvalidStateError,
    InvalidTransitionError,
    StateMachineError,
)
from .scope import ANY, Exactly, applies_to, select_for
from .hooks import Callback, Guard
from .definition import MachineBuilder, MachineDefinition
from .results import Failed, Forbidden, GuardRejected, Ok, TransitionResult
from .machine import Machine

__all__ = [
    # Errors
    "ConfigurationError",
    "GuardFailedError",
    "InitialStateAlreadyDefinedError",
    "InvalidStateError",
    "InvalidTransitionError",
    "StateMachineError",
    # Matching
    "ANY",
    "Exactly",
    "applies_to",
    "select_for",
    # Hooks
    "Callback",
    "Guard",
    # Definition
    "MachineBuilder",
    "MachineDefinition",
    # Outcomes
    "Failed",
    "Forbidden",
    "GuardRejected",
    "Ok",
    "TransitionResult",
    # Runtime
    "Machine",
]
