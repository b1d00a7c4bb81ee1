"""
Persistence package: transition records and the in-memory storage adapter.

Architecture:
- TransitionRecord is the artifact produced by every committed transition
- MemoryAdapter implements the StorageAdapter protocol in process memory
- Durable backends implement the same protocol outside this package
"""

from .memory import MemoryAdapter
from .transition import TransitionRecord

__all__ = ["MemoryAdapter", "TransitionRecord"]
