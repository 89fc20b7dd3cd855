"""
TempoGraph - Main Class

This is the class users interact with.
It's a thin coordination layer that provides:
1. The entity store (nodes, temporal edges, adjacency index)
2. Point and interval queries
3. Time-respecting traversal
4. Snapshots of the graph at a time or over a window
"""
from typing import Any, Dict, List, Optional, Set

from tempograph_core.model.base import Timestamp, FAR_PAST
from tempograph_core.model.nodes import TemporalNode
from tempograph_core.model.edges import TemporalEdge
from tempograph_core.operators.interval_query import IntervalQueryEngine
from tempograph_core.operators.temporal_snapshot import Snapshot
from tempograph_core.operators.traversal import time_respecting_path, earliest_arrival_times
from tempograph_core.storage.base import IdentityFn, StorageBackend
from tempograph_core.storage.memory import MemoryStorage


class TempoGraph:
    """
    Main TempoGraph class.

    Architecture:
        User -> TempoGraph -> [MemoryStorage, IntervalQueryEngine, traversal] -> NetworkX

    Example:
        tg = TempoGraph(identity_fn=lambda name: name)
        tg.insert_node('A')
        tg.insert_node('B')
        edge = tg.add_edge('A', 'B', activated_at=10, deactivated_at=20)

        tg.active_at(20)               # [edge]
        tg.active_at(22)               # []
        tg.edges_overlapping(20, 30)   # [edge]
    """

    def __init__(self, identity_fn: IdentityFn, storage: Optional[StorageBackend] = None):
        """
        Args:
            identity_fn: Pure, deterministic data -> oid mapping
            storage: Entity store to use (default: a new MemoryStorage)
        """
        self.storage = storage if storage is not None else MemoryStorage(identity_fn)
        self.queries = IntervalQueryEngine(self.storage)

    @property
    def identity_fn(self) -> IdentityFn:
        return self.storage.identity_fn

    # =========================================================================
    # NODES
    # =========================================================================

    def insert_node(self, data: Any) -> TemporalNode:
        """
        Insert a node; its oid is identity_fn(data).

        Raises:
            DuplicateIdentityError: If the oid is already present
        """
        return self.storage.insert_node(data)

    def get_node(self, oid: str) -> Optional[TemporalNode]:
        return self.storage.get_node(oid)

    def has_node(self, oid: str) -> bool:
        return self.storage.has_node(oid)

    def all_nodes(self) -> List[TemporalNode]:
        return self.storage.all_nodes()

    # =========================================================================
    # EDGES
    # =========================================================================

    def add_edge(
        self,
        source: Any,
        target: Any,
        activated_at: Timestamp,
        data: Any = None,
        deactivated_at: Optional[Timestamp] = None,
        created_at: Optional[Timestamp] = None,
        label: Optional[str] = None,
        oid: Optional[str] = None
    ) -> TemporalEdge:
        """
        Add a temporal edge source -> target.

        source and target may be oids or node data (resolved through
        identity_fn). No self-loop or cycle restriction.

        Raises:
            UnknownNodeError: If either endpoint is absent
            DuplicateEdgeError: If an explicit oid is already used
        """
        return self.storage.add_edge(
            source, target, activated_at,
            data=data,
            deactivated_at=deactivated_at,
            created_at=created_at,
            label=label,
            oid=oid
        )

    def get_edge(self, oid: str) -> Optional[TemporalEdge]:
        return self.storage.get_edge(oid)

    def deactivate_edge(self, oid: str, at: Timestamp) -> None:
        """
        End an edge's activation interval at `at`.

        An unknown oid is a silent no-op, while node lookups raise
        UnknownNodeError.
        """
        self.storage.deactivate_edge(oid, at)

    def all_edges(self) -> List[TemporalEdge]:
        return self.storage.all_edges()

    # =========================================================================
    # TEMPORAL QUERIES
    # =========================================================================

    def active_at(self, time: Timestamp) -> List[TemporalEdge]:
        return self.queries.active_at(time)

    def edges_overlapping(self, t0: Timestamp, t1: Timestamp) -> List[TemporalEdge]:
        return self.queries.edges_overlapping(t0, t1)

    def outgoing(self, oid: str) -> List[TemporalEdge]:
        return self.queries.outgoing(oid)

    def active_outgoing(self, oid: str, time: Timestamp) -> List[TemporalEdge]:
        return self.queries.active_outgoing(oid, time)

    def ancestors(self, oid: str) -> Set[str]:
        """
        Every node with a path to oid, over edges of any time.

        Raises:
            UnknownNodeError: If node is absent
        """
        return self.storage.ancestors(oid)

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def time_respecting_path(
        self,
        start: str,
        end: str,
        start_time: Timestamp = FAR_PAST
    ) -> Optional[List[str]]:
        """
        Earliest-arrival time-respecting path, or None.

        Example:
            path = tg.time_respecting_path('A', 'C')   # ['A', 'B', 'C']
        """
        return time_respecting_path(self.storage, start, end, start_time)

    def earliest_arrival_times(self, start: str, start_time: Timestamp = FAR_PAST) -> Dict[str, Timestamp]:
        return earliest_arrival_times(self.storage, start, start_time)

    def snapshot(self, when) -> Snapshot:
        """
        Create a snapshot of the graph at a specific time or interval.

        Args:
            when: Timestamp OR tuple (start, end) for interval

        Example:
            snap = tg.snapshot(15)
            window = tg.snapshot((10, 30))
        """
        return Snapshot(self, when)

    # =========================================================================
    # UTILITY
    # =========================================================================

    def count_nodes(self) -> int:
        return self.storage.count_nodes()

    def count_edges(self) -> int:
        return self.storage.count_edges()

    def stats(self):
        """Get statistics"""
        return {
            'nodes': self.count_nodes(),
            'edges': self.count_edges(),
        }

    def __repr__(self):
        stats = self.stats()
        return f"TempoGraph(nodes={stats['nodes']}, edges={stats['edges']})"
