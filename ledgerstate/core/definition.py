# ledgerstate/core/definition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ledgerstate.core.errors import InitialStateAlreadyDefinedError, InvalidStateError, InvalidTransitionError
from ledgerstate.core.hooks import Callback, Guard
from ledgerstate.core.scope import pattern_for, select_for
from ledgerstate.core.states import optional_state_name, state_name, state_names
from ledgerstate.interfaces.types import StateLike, StateName

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MachineDefinition:
    """
    Immutable description of a machine type: its states, initial state,
    successor map and ordered hook registries. One definition is shared
    read-only by every Machine bound to it.
    """

    states: Tuple[StateName, ...]
    initial_state: StateName
    successors: Mapping[Optional[StateName], Tuple[StateName, ...]]
    guards: Tuple[Guard, ...] = ()
    before_callbacks: Tuple[Callback, ...] = ()
    after_callbacks: Tuple[Callback, ...] = ()

    def successors_of(self, state: Optional[StateName]) -> Tuple[StateName, ...]:
        """Allowed targets from state, in declaration order."""
        return self.successors.get(state, ())

    def is_terminal(self, state: StateName) -> bool:
        return not self.successors.get(state)

    def has_edge(self, from_state: Optional[StateName], to_state: StateName) -> bool:
        return to_state in self.successors_of(from_state)

    def guards_for(self, from_state: Optional[StateName], to_state: Optional[StateName]) -> List[Guard]:
        return select_for(self.guards, from_state, to_state)

    def before_callbacks_for(self, from_state: Optional[StateName], to_state: Optional[StateName]) -> List[Callback]:
        return select_for(self.before_callbacks, from_state, to_state)

    def after_callbacks_for(self, from_state: Optional[StateName], to_state: Optional[StateName]) -> List[Callback]:
        return select_for(self.after_callbacks, from_state, to_state)


class MachineBuilder:
    """
    Accumulates the graph and hooks of a machine type, validating every
    declaration as it is made, and freezes them into a MachineDefinition.

    Declarations are order dependent: a hook can only be scoped to states and
    edges that were declared before it.

    Usage::

        builder = MachineBuilder()
        builder.state("pending", initial=True)
        builder.state("approved")
        builder.transition("pending", "approved")

        @builder.before_transition(to="approved")
        def notify(order):
            ...

        definition = builder.build()
    """

    def __init__(self) -> None:
        self._states: List[StateName] = []
        self._initial_state: Optional[StateName] = None
        self._successors: Dict[Optional[StateName], List[StateName]] = {}
        self._guards: List[Guard] = []
        self._before_callbacks: List[Callback] = []
        self._after_callbacks: List[Callback] = []
        self._lock = threading.Lock()

    @property
    def states(self) -> List[StateName]:
        return list(self._states)

    @property
    def initial_state(self) -> Optional[StateName]:
        return self._initial_state

    @property
    def successors(self) -> Dict[Optional[StateName], List[StateName]]:
        return {k: list(v) for k, v in self._successors.items()}

    # -------------------------------------------------------------------------
    # Graph declaration
    # -------------------------------------------------------------------------

    def state(self, name: StateLike, initial: bool = False) -> StateName:
        """
        Declare a state.

        :param name: State name (str or Enum member).
        :param initial: Mark this state as the machine's initial state.
        :return: The normalized state name.
        :raises InitialStateAlreadyDefinedError: If initial is set twice.
        """
        name = state_name(name)
        with self._lock:
            if initial:
                if self._initial_state is not None:
                    raise InitialStateAlreadyDefinedError(
                        f"Cannot set initial state to '{name}', already defined as '{self._initial_state}'.",
                        state=name,
                        existing=self._initial_state,
                    )
                self._initial_state = name
            self._states.append(name)
        logger.debug("Declared state %r%s", name, " (initial)" if initial else "")
        return name

    def transition(
        self, from_: Optional[StateLike], to: Union[None, StateLike, Iterable[StateLike]]
    ) -> List[StateName]:
        """
        Declare edges from from_ to one or more target states. Repeated
        declarations for the same from_ accumulate.

        :param from_: Source state, or None for an entry transition.
        :param to: A target state, an iterable of targets, or None for no targets.
        :return: The normalized targets that were appended.
        :raises InvalidStateError: If any referenced state was never declared.
        """
        source = optional_state_name(from_)
        targets = state_names(to)
        with self._lock:
            for name in ([source] if source is not None else []) + targets:
                self._validate_state(name)
            self._successors.setdefault(source, []).extend(targets)
        logger.debug("Declared transition %r -> %r", source, targets)
        return targets

    # -------------------------------------------------------------------------
    # Hook registration
    # -------------------------------------------------------------------------

    def guard_transition(
        self,
        from_: Optional[StateLike] = None,
        to: Optional[StateLike] = None,
        action: Optional[Callable[[Any], Any]] = None,
    ):
        """
        Register a guard for transitions matching (from_, to). None on either
        side matches any state. Without action, returns a decorator.
        """
        return self._register(self._guards, Guard, from_, to, action)

    def before_transition(
        self,
        from_: Optional[StateLike] = None,
        to: Optional[StateLike] = None,
        action: Optional[Callable[[Any], None]] = None,
    ):
        """Register a callback run before a matching transition is persisted."""
        return self._register(self._before_callbacks, Callback, from_, to, action)

    def after_transition(
        self,
        from_: Optional[StateLike] = None,
        to: Optional[StateLike] = None,
        action: Optional[Callable[[Any], None]] = None,
    ):
        """Register a callback run after a matching transition is persisted."""
        return self._register(self._after_callbacks, Callback, from_, to, action)

    def _register(self, registry, hook_class, from_, to, action):
        source = optional_state_name(from_)
        target = optional_state_name(to)

        def register(fn):
            if not callable(fn):
                raise TypeError(f"{hook_class.__name__} action must be callable, got {fn!r}")
            with self._lock:
                self.validate_hook_scope(source, target)
                registry.append(hook_class(action=fn, from_pattern=pattern_for(source), to_pattern=pattern_for(target)))
            logger.debug("Registered %s %s for %r -> %r", hook_class.__name__.lower(), fn, source, target)
            return fn

        if action is None:
            return register
        return register(action)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_hook_scope(self, from_: Optional[StateName], to: Optional[StateName]) -> None:
        """
        Reject hook scopes that could never fire.

        :raises InvalidStateError: If either side names an undeclared state.
        :raises InvalidTransitionError: If from_ is terminal, to is never a
            transition target, or (from_, to) is not an edge.
        """
        for name in (from_, to):
            if name is not None:
                self._validate_state(name)
        if from_ is None and to is None:
            return

        if from_ is not None and not self._successors.get(from_):
            raise InvalidTransitionError(
                f"Cannot transition away from terminal state '{from_}'", from_state=from_, to_state=to
            )
        if to is not None and not any(to in targets for targets in self._successors.values()):
            raise InvalidTransitionError(
                f"Cannot transition to initial state '{to}'", from_state=from_, to_state=to
            )
        if from_ is not None and to is not None and to not in self._successors.get(from_, []):
            raise InvalidTransitionError(
                f"Cannot transition from '{from_}' to '{to}'", from_state=from_, to_state=to
            )

    def _validate_state(self, name: StateName) -> None:
        if name not in self._states:
            raise InvalidStateError(f"Invalid state '{name}'", state=name)

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self) -> MachineDefinition:
        """
        Freeze the current declarations into a MachineDefinition.

        :raises InvalidStateError: If no initial state was declared.
        """
        with self._lock:
            if self._initial_state is None:
                raise InvalidStateError("Machine definition has no initial state")
            return MachineDefinition(
                states=tuple(dict.fromkeys(self._states)),
                initial_state=self._initial_state,
                successors=MappingProxyType({k: tuple(v) for k, v in self._successors.items()}),
                guards=tuple(self._guards),
                before_callbacks=tuple(self._before_callbacks),
                after_callbacks=tuple(self._after_callbacks),
            )
