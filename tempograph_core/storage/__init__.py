"""
TempoGraph Core Storage

Entity stores for TempoGraph.

Available backends:
- MemoryStorage: In-memory (NetworkX)
"""

from .base import StorageBackend, IdentityFn
from .memory import MemoryStorage, create_memory_storage

__all__ = [
    'StorageBackend',
    'IdentityFn',
    'MemoryStorage',
    'create_memory_storage',
]
