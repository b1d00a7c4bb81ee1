"""ledgerstate: finite state machines with guarded transitions and recorded history

This package lets an application declare named states, the transitions
allowed between them and hooks around those transitions, then move any
object through that graph while a storage adapter records every step.

Responsibilities:
    - Declaration-time validation of states, transitions and hook scopes
    - Guard evaluation and before/after callback dispatch
    - Current state and history derived from storage

Interactions:
    - Client code through MachineBuilder and Machine
    - Storage backends through the StorageAdapter protocol
    - Logging system for diagnostics (``logging.getLogger("ledgerstate")``)

Cross-cutting Concerns:
    Thread Safety:
        - Builders and the in-memory adapter guard their internals with locks
        - Concurrent transitions of one subject must be serialized by the
          caller or by storage

    Error Handling:
        - Structured error hierarchy rooted at StateMachineError
        - Rule refusals are distinguishable from failures (see core.results)
"""

# Import order matters to avoid circular dependencies
from ledgerstate.core import (
    ANY,
    Callback,
    ConfigurationError,
    Exactly,
    Failed,
    Forbidden,
    Guard,
    GuardFailedError,
    GuardRejected,
    InitialStateAlreadyDefinedError,
    InvalidStateError,
    InvalidTransitionError,
    Machine,
    MachineBuilder,
    MachineDefinition,
    Ok,
    StateMachineError,
    TransitionResult,
)
from ledgerstate.config import Settings, configure, get_settings, reset_settings
from ledgerstate.interfaces import StorageAdapter
from ledgerstate.persistence import MemoryAdapter, TransitionRecord

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "Callback",
    "ConfigurationError",
    "Exactly",
    "Failed",
    "Forbidden",
    "Guard",
    "GuardFailedError",
    "GuardRejected",
    "InitialStateAlreadyDefinedError",
    "InvalidStateError",
    "InvalidTransitionError",
    "Machine",
    "MachineBuilder",
    "MachineDefinition",
    "MemoryAdapter",
    "Ok",
    "Settings",
    "StateMachineError",
    "StorageAdapter",
    "TransitionRecord",
    "TransitionResult",
    "configure",
    "get_settings",
    "reset_settings",
]
