# ledgerstate/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Union

from ledgerstate.config import get_settings
from ledgerstate.core.definition import MachineDefinition
from ledgerstate.core.errors import GuardFailedError, InvalidTransitionError
from ledgerstate.core.hooks import Callback, Guard
from ledgerstate.core.results import Failed, Forbidden, GuardRejected, Ok, TransitionResult
from ledgerstate.core.states import optional_state_name, state_name
from ledgerstate.interfaces.protocols import StorageAdapter, TransitionRecordLike
from ledgerstate.interfaces.types import Metadata, StateLike, StateName

logger = logging.getLogger(__name__)


class Machine:
    """
    Drives one subject through the graph of a MachineDefinition, recording
    every committed transition in a storage adapter.

    The machine keeps no state of its own: the current state is read from
    storage on every access, falling back to the definition's initial state
    when the subject has no history.
    """

    def __init__(
        self,
        subject: Any,
        definition: MachineDefinition,
        storage: Optional[StorageAdapter] = None,
    ) -> None:
        """
        :param subject: The object whose lifecycle this machine tracks. It is
            passed to every guard and callback and to the storage adapter.
        :param definition: Frozen machine definition built by MachineBuilder.
        :param storage: Storage adapter; defaults to a new adapter from the
            configured ``storage_adapter`` factory.
        """
        self._subject = subject
        self._definition = definition
        self._storage = storage if storage is not None else get_settings().storage_adapter()

    @property
    def subject(self) -> Any:
        return self._subject

    @property
    def definition(self) -> MachineDefinition:
        return self._definition

    @property
    def storage(self) -> StorageAdapter:
        return self._storage

    @property
    def current_state(self) -> StateName:
        """The subject's state according to storage; never cached."""
        last = self._storage.last(self._subject)
        return last.to_state if last is not None else self._definition.initial_state

    def last_transition(self) -> Optional[TransitionRecordLike]:
        return self._storage.last(self._subject)

    def history(self) -> Sequence[TransitionRecordLike]:
        """All transition records for the subject, oldest first."""
        return self._storage.history(self._subject)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def can_transition_to(self, target: StateLike) -> bool:
        """
        Check guards and the graph without committing anything.

        Returns False when a guard rejects or the edge does not exist. Other
        exceptions raised by guards or storage propagate.
        """
        return self._check(self.current_state, state_name(target)) is None

    def allowed_transitions(self) -> List[StateName]:
        """Successors of the current state that can currently be entered."""
        from_state = self.current_state
        return [
            target
            for target in dict.fromkeys(self._definition.successors_of(from_state))
            if self._check(from_state, target) is None
        ]

    def attempt(self, target: StateLike, metadata: Metadata = None) -> TransitionResult:
        """
        Run the full transition pipeline and report how it ended.

        Guards run first, in declaration order, then the edge is checked. If
        both pass, before-callbacks run, storage records the transition and
        after-callbacks run. A refusal stops the pipeline before any callback
        or write; an exception from a callback or storage stops it where it
        was raised and is returned as Failed.
        """
        to_state = state_name(target)
        from_state: Optional[StateName] = None
        try:
            from_state = self.current_state
            refusal = self._check(from_state, to_state)
            if refusal is not None:
                logger.debug("Transition %r -> %r refused: %s", from_state, to_state, refusal.error.message)
                return refusal

            for callback in self._definition.before_callbacks_for(from_state, to_state):
                callback.call(self._subject)

            self._storage.create(self._subject, to_state, metadata)

            for callback in self._definition.after_callbacks_for(from_state, to_state):
                callback.call(self._subject)

            new_state = self.current_state
        except Exception as e:
            logger.debug("Transition %r -> %r of %r failed: %s", from_state, to_state, self._subject, e)
            return Failed(e)

        logger.info("Transitioned %r from %r to %r", self._subject, from_state, new_state)
        return Ok(from_state, new_state)

    def transition_to(self, target: StateLike, metadata: Metadata = None) -> StateName:
        """
        Move the subject to target.

        :param target: The state to enter.
        :param metadata: Opaque payload stored with the transition record.
        :return: The current state after the transition, read back from storage.
        :raises GuardFailedError: If a guard vetoed the transition.
        :raises InvalidTransitionError: If target is not a successor of the
            current state.
        :raises Exception: Anything raised by callbacks or storage, unchanged.
        """
        return self.attempt(target, metadata).unwrap()

    def try_transition_to(self, target: StateLike, metadata: Metadata = None) -> Union[StateName, bool]:
        """
        Like transition_to, but returns False when the machine's rules refuse
        the transition. Callback and storage errors still propagate.
        """
        result = self.attempt(target, metadata)
        if result.refused:
            return False
        return result.unwrap()

    def _check(self, from_state: StateName, to_state: StateName) -> Optional[Union[GuardRejected, Forbidden]]:
        for guard in self._definition.guards_for(from_state, to_state):
            try:
                guard.call(self._subject, from_state, to_state)
            except GuardFailedError as e:
                return GuardRejected(e)

        if not self._definition.has_edge(from_state, to_state):
            return Forbidden(
                InvalidTransitionError(
                    f"Cannot transition from '{from_state}' to '{to_state}'",
                    from_state=from_state,
                    to_state=to_state,
                )
            )
        return None

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def guards_for(self, from_: Optional[StateLike] = None, to: Optional[StateLike] = None) -> List[Guard]:
        return self._definition.guards_for(optional_state_name(from_), optional_state_name(to))

    def before_callbacks_for(self, from_: Optional[StateLike] = None, to: Optional[StateLike] = None) -> List[Callback]:
        return self._definition.before_callbacks_for(optional_state_name(from_), optional_state_name(to))

    def after_callbacks_for(self, from_: Optional[StateLike] = None, to: Optional[StateLike] = None) -> List[Callback]:
        return self._definition.after_callbacks_for(optional_state_name(from_), optional_state_name(to))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(subject={self._subject!r})"
