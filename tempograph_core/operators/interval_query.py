"""
Interval Query Engine - which edges are relevant to a time or a window.

All queries are linear scans over the store. Bounds are inclusive on both
sides and an open edge (deactivated_at=None) extends to FAR_FUTURE.

Empty-window policy:
    window_length(t0, t1) is 0.0 whenever t1 <= t0. Every rate or ratio in
    the metrics layer divides through it and reports 0.0 for such windows
    instead of raising.
"""

from typing import List

from tempograph_core.model.base import Timestamp
from tempograph_core.model.edges import TemporalEdge
from tempograph_core.storage.base import StorageBackend


class IntervalQueryEngine:
    """
    Read-only point and interval queries over an entity store.

    Example:
        queries = IntervalQueryEngine(storage)
        queries.active_at(20)               # edges alive at t=20
        queries.edges_overlapping(20, 30)   # edges touching [20, 30]
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    # =========================================================================
    # Point queries
    # =========================================================================

    def active_at(self, time: Timestamp) -> List[TemporalEdge]:
        """Edges with activated_at <= time <= deactivated_at (or open)."""
        return [e for e in self.storage.all_edges() if e.activated_at <= time <= e.end_time]

    def active_outgoing(self, oid: str, time: Timestamp) -> List[TemporalEdge]:
        """
        Outgoing edges of oid active at time, in enumeration order.

        Raises:
            UnknownNodeError: If node is absent
        """
        return [e for e in self.storage.outgoing_edges(oid) if e.activated_at <= time <= e.end_time]

    # =========================================================================
    # Interval queries
    # =========================================================================

    def edges_overlapping(self, t0: Timestamp, t1: Timestamp) -> List[TemporalEdge]:
        """
        Edges whose interval intersects [t0, t1]. Touching endpoints count.

        t0 > t1 matches nothing and is not an error.
        """
        return [e for e in self.storage.all_edges() if e.end_time >= t0 and e.activated_at <= t1]

    def activations_between(self, t0: Timestamp, t1: Timestamp) -> List[TemporalEdge]:
        """Edges whose activated_at falls in [t0, t1]."""
        return [e for e in self.storage.all_edges() if t0 <= e.activated_at <= t1]

    def deactivations_between(self, t0: Timestamp, t1: Timestamp) -> List[TemporalEdge]:
        """Edges whose deactivated_at falls in [t0, t1]. Open edges never match."""
        return [
            e for e in self.storage.all_edges()
            if e.deactivated_at is not None and t0 <= e.deactivated_at <= t1
        ]

    # =========================================================================
    # Adjacency
    # =========================================================================

    def outgoing(self, oid: str) -> List[TemporalEdge]:
        """
        Every edge indexed under oid, regardless of time.

        Raises:
            UnknownNodeError: If node is absent
        """
        return self.storage.outgoing_edges(oid)

    # =========================================================================
    # Windows
    # =========================================================================

    @staticmethod
    def window_length(t0: Timestamp, t1: Timestamp) -> float:
        """t1 - t0, or 0.0 for an empty window (t1 <= t0)."""
        if t1 <= t0:
            return 0.0
        return float(t1 - t0)

    def __repr__(self) -> str:
        return f"IntervalQueryEngine({self.storage!r})"
