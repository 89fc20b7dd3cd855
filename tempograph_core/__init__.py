"""
TempoGraph Core

In-memory temporal graph with interval edges, time-respecting traversal and
a lazy, per-timestamp memoized evaluation engine.
"""

from tempograph_core.utils.config import SETTINGS, Settings
from tempograph_core.model import (
    TemporalNode,
    TemporalEdge,
    SourceNode,
    ComputedNode,
    FAR_FUTURE,
    FAR_PAST,
    TempoGraphError,
    ValidationError,
    DuplicateIdentityError,
    UnknownNodeError,
    DuplicateEdgeError,
    CyclicDependencyError,
)
from tempograph_core.storage import MemoryStorage, StorageBackend
from tempograph_core.operators import IntervalQueryEngine, Snapshot
from tempograph_core.tempograph import TempoGraph
from tempograph_core.engine import EvaluationCache, LazyGraphEngine

__version__ = "0.1.0"

__all__ = [
    'SETTINGS',
    'Settings',
    'TemporalNode',
    'TemporalEdge',
    'SourceNode',
    'ComputedNode',
    'FAR_FUTURE',
    'FAR_PAST',
    'TempoGraphError',
    'ValidationError',
    'DuplicateIdentityError',
    'UnknownNodeError',
    'DuplicateEdgeError',
    'CyclicDependencyError',
    'MemoryStorage',
    'StorageBackend',
    'IntervalQueryEngine',
    'Snapshot',
    'TempoGraph',
    'EvaluationCache',
    'LazyGraphEngine',
]
