# ledgerstate/persistence/memory.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Hashable, List, Optional

from ledgerstate.interfaces.types import Metadata, StateName
from ledgerstate.persistence.transition import TransitionRecord


class MemoryAdapter:
    """
    Keeps transition histories in process memory.

    Histories are keyed by ``subject_key(subject)``, ``id`` by default, so a
    single adapter can serve several subjects. The adapter holds a reference
    to every subject it has a history for, so an ``id`` key cannot be reused
    by a new object until that history is cleared. Writes are serialized by a
    lock; this keeps sort keys dense but does not make the engine's
    read-validate-write sequence atomic.
    """

    def __init__(
        self,
        subject_key: Callable[[Any], Hashable] = id,
        record_class: Callable[..., TransitionRecord] = TransitionRecord,
    ) -> None:
        """
        :param subject_key: Maps a subject to the key its history is stored under.
        :param record_class: Factory called as
            ``record_class(to_state=..., sort_key=..., metadata=...)``.
        """
        self._subject_key = subject_key
        self._record_class = record_class
        self._histories: Dict[Hashable, List[TransitionRecord]] = {}
        self._subjects: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def last(self, subject: Any) -> Optional[TransitionRecord]:
        with self._lock:
            records = self._histories.get(self._subject_key(subject))
            return records[-1] if records else None

    def create(self, subject: Any, to_state: StateName, metadata: Metadata = None) -> TransitionRecord:
        with self._lock:
            key = self._subject_key(subject)
            records = self._histories.setdefault(key, [])
            self._subjects[key] = subject
            record = self._record_class(
                to_state=to_state,
                sort_key=len(records) + 1,
                metadata=metadata if metadata is not None else {},
            )
            records.append(record)
            return record

    def history(self, subject: Any) -> List[TransitionRecord]:
        with self._lock:
            return list(self._histories.get(self._subject_key(subject), []))

    def clear(self, subject: Any = None) -> None:
        """Forget the history of subject, or of every subject when omitted."""
        with self._lock:
            if subject is None:
                self._histories.clear()
                self._subjects.clear()
            else:
                key = self._subject_key(subject)
                self._histories.pop(key, None)
                self._subjects.pop(key, None)
