# ledgerstate/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from ledgerstate.interfaces.types import Metadata, StateName


@runtime_checkable
class TransitionRecordLike(Protocol):
    """
    Minimal shape of a persisted transition.

    Runtime Invariants:
    - to_state names the state the subject entered.
    - Records are never mutated once returned by storage.
    """

    @property
    def to_state(self) -> StateName: ...

    @property
    def metadata(self) -> Any: ...


@runtime_checkable
class StorageAdapter(Protocol):
    """
    Storage collaborator protocol.

    Methods:
        last(subject): Returns the most recent record, or None if the subject
            never transitioned.
        create(subject, to_state, metadata): Durably appends a record and
            returns it.
        history(subject): Returns every record for the subject, oldest first.

    Runtime Invariants:
    - history(subject)[-1] is last(subject) whenever history is non-empty.
    - create() is the only mutating call the engine makes.

    Error Handling:
    - Any exception raised here is propagated by the engine unchanged. The
      engine does not retry and does not run after-callbacks when create()
      fails.
    - Adapters that need "one winning transition" semantics under concurrent
      writers must enforce it themselves (uniqueness constraint,
      compare-and-swap, lock).
    """

    def last(self, subject: Any) -> Optional[TransitionRecordLike]:
        """Return the most recent transition record for subject, if any."""
        ...

    def create(self, subject: Any, to_state: StateName, metadata: Metadata) -> TransitionRecordLike:
        """Persist a transition of subject into to_state."""
        ...

    def history(self, subject: Any) -> Sequence[TransitionRecordLike]:
        """Return all transition records for subject, oldest first."""
        ...
