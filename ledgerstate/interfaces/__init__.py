"""
Interfaces package: type aliases and the storage collaborator contract.

The engine never depends on a concrete storage backend; anything satisfying
StorageAdapter can persist transition records.
"""

from .protocols import StorageAdapter, TransitionRecordLike
from .types import CallbackAction, GuardAction, Metadata, StateLike, StateName

__all__ = [
    "StorageAdapter",
    "TransitionRecordLike",
    "CallbackAction",
    "GuardAction",
    "Metadata",
    "StateLike",
    "StateName",
]
