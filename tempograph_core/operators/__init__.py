# File: tempograph_core/operators/__init__.py
"""
TempoGraph Operators Module

Exports:
- IntervalQueryEngine: point/interval queries over the entity store
- time_respecting_path, earliest_arrival_times: temporal traversal
- Snapshot, SnapshotNode, SnapshotEdge: graph state at a time or window
- Graph metrics: density, connected_components, degree_distribution
- Temporal metrics: window/edge/node aggregates (temporal_metrics module)
"""

from tempograph_core.operators.interval_query import IntervalQueryEngine
from tempograph_core.operators.traversal import time_respecting_path, earliest_arrival_times
from tempograph_core.operators.temporal_snapshot import Snapshot, SnapshotNode, SnapshotEdge

# Graph metrics (can be used directly or via Snapshot methods)
from tempograph_core.operators.graph_metrics import (
    density,
    connected_components,
    degree_distribution,
    ComponentResult
)
from tempograph_core.operators import temporal_metrics

__all__ = [
    "IntervalQueryEngine",

    # Traversal
    "time_respecting_path",
    "earliest_arrival_times",

    # Snapshot classes
    "Snapshot",
    "SnapshotNode",
    "SnapshotEdge",

    # Graph metrics
    "density",
    "connected_components",
    "degree_distribution",
    "ComponentResult",
    "temporal_metrics",
]
