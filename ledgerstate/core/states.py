# ledgerstate/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum
from typing import Iterable, List, Optional, Union

from ledgerstate.interfaces.types import StateLike, StateName


def state_name(state: StateLike) -> StateName:
    """
    Normalize a state reference to its canonical string name.

    Enum members contribute their value, so ``Status.PENDING = "pending"``
    and ``"pending"`` name the same state.
    """
    if isinstance(state, Enum):
        return str(state.value)
    return str(state)


def optional_state_name(state: Optional[StateLike]) -> Optional[StateName]:
    """Like state_name, but lets None (no state / wildcard) through."""
    return None if state is None else state_name(state)


def state_names(states: Union[None, StateLike, Iterable[StateLike]]) -> List[StateName]:
    """
    Normalize one state or an iterable of states into an ordered list of names.
    Strings and enum members count as a single state, never as iterables;
    None is an empty list.
    """
    if states is None:
        return []
    if isinstance(states, (str, Enum)):
        return [state_name(states)]
    return [state_name(s) for s in states]
