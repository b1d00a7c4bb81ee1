# ledgerstate/persistence/transition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from ledgerstate.interfaces.types import StateName


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TransitionRecord:
    """
    A committed transition of one subject.

    :param to_state: The state the subject entered.
    :param sort_key: Position in the subject's history, starting at 1.
    :param metadata: Caller-supplied payload.
    :param created_at: UTC timestamp of the write.
    """

    to_state: StateName
    sort_key: int
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
