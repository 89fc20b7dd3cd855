"""
Temporal Snapshot - graph state at a point or over an interval in time.

Architecture:
- SnapshotNode/SnapshotEdge: Immutable dataclasses
- Snapshot: Lazily loaded view built from the interval query engine

Point snapshots (when=t) hold every node plus the edges active at t.
Interval snapshots (when=(t0, t1)) hold every node plus the edges
overlapping [t0, t1], each clipped to the window through valid_from/valid_to.
Nodes have no lifetime of their own, so every node is in every snapshot.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Literal, TYPE_CHECKING

import networkx as nx

from tempograph_core.model.base import Timestamp, ValidationError, validate_timestamp
from tempograph_core.operators.graph_metrics import (
    connected_components, density, degree_distribution, ComponentResult,
)

if TYPE_CHECKING:
    from tempograph_core.tempograph.tempograph import TempoGraph


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class SnapshotNode:
    """Immutable node in a snapshot."""
    oid: str
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.data.to_dict() if hasattr(self.data, 'to_dict') else self.data
        return {'oid': self.oid, 'data': data}


@dataclass(frozen=True)
class SnapshotEdge:
    """
    Immutable edge in a snapshot.

    activated_at/deactivated_at are the stored interval; valid_from/valid_to
    are the part of it inside an interval snapshot's window (None for point
    snapshots).
    """
    oid: str
    source: str
    target: str
    activated_at: Timestamp
    deactivated_at: Optional[Timestamp] = None
    label: Optional[str] = None
    valid_from: Optional[Timestamp] = None
    valid_to: Optional[Timestamp] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'oid': self.oid,
            'source': self.source,
            'target': self.target,
            'label': self.label,
            'activated_at': self.activated_at,
            'deactivated_at': self.deactivated_at,
            'valid_from': self.valid_from,
            'valid_to': self.valid_to,
        }


# =============================================================================
# SNAPSHOT CLASS
# =============================================================================

class Snapshot:
    """
    Snapshot of a TempoGraph at a specific time or over an interval.

    Example:
        snap = tg.snapshot(15)
        snap.count_edges()
        window = tg.snapshot((10, 30))
        window.get_all_edges()[0].valid_from
    """

    def __init__(self, graph: 'TempoGraph', when):
        """
        Args:
            graph: TempoGraph to read from
            when: Timestamp OR tuple (start, end) for interval
        """
        self.graph = graph
        self.when = when

        self._nodes: Optional[List[SnapshotNode]] = None
        self._edges: Optional[List[SnapshotEdge]] = None

        self._validate()

    def _validate(self):
        """Validate constructor parameters"""
        if self.is_interval():
            if len(self.when) != 2:
                raise ValidationError(f"Interval must be (start, end), got {self.when!r}")
            validate_timestamp(self.when[0], "start")
            validate_timestamp(self.when[1], "end")
        else:
            validate_timestamp(self.when, "when")

    def is_interval(self) -> bool:
        """Check if this is an interval snapshot"""
        return isinstance(self.when, tuple)

    # =========================================================================
    # LOAD GRAPH STRUCTURE
    # =========================================================================

    def _load_graph(self):
        if self._nodes is not None:
            return

        self._nodes = [SnapshotNode(oid=n.oid, data=n.data) for n in self.graph.all_nodes()]

        if self.is_interval():
            start, end = self.when
            edges = self.graph.edges_overlapping(start, end)
        else:
            edges = self.graph.active_at(self.when)

        self._edges = []
        for edge in edges:
            valid_from = valid_to = None
            if self.is_interval():
                valid_from = max(edge.activated_at, start)
                valid_to = min(edge.end_time, end)
            self._edges.append(
                SnapshotEdge(
                    oid=edge.oid,
                    source=edge.source,
                    target=edge.target,
                    activated_at=edge.activated_at,
                    deactivated_at=edge.deactivated_at,
                    label=edge.label,
                    valid_from=valid_from,
                    valid_to=valid_to
                )
            )

    # =========================================================================
    # PUBLIC API - Get Nodes/Edges
    # =========================================================================

    def get_all_nodes(self) -> List[SnapshotNode]:
        self._load_graph()
        return list(self._nodes)

    def get_all_edges(self) -> List[SnapshotEdge]:
        self._load_graph()
        return list(self._edges)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Materialize the snapshot as a NetworkX MultiDiGraph (key = edge oid)."""
        self._load_graph()
        g = nx.MultiDiGraph()
        for node in self._nodes:
            g.add_node(node.oid)
        for edge in self._edges:
            g.add_edge(edge.source, edge.target, key=edge.oid, activated_at=edge.activated_at,
                       deactivated_at=edge.deactivated_at)
        return g

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert entire snapshot to dictionary."""
        nodes = self.get_all_nodes()
        edges = self.get_all_edges()

        return {
            'when': self.when if not self.is_interval() else {'start': self.when[0], 'end': self.when[1]},
            'is_interval': self.is_interval(),
            'nodes': [n.to_dict() for n in nodes],
            'edges': [e.to_dict() for e in edges],
            'node_count': len(nodes),
            'edge_count': len(edges),
        }

    # =========================================================================
    # METRICS
    # =========================================================================

    def count_nodes(self) -> int:
        self._load_graph()
        return len(self._nodes)

    def count_edges(self) -> int:
        self._load_graph()
        return len(self._edges)

    def density(self, directed: bool = True) -> float:
        """Compute graph density at this snapshot."""
        return density(self, directed)

    def connected_components(self, directed: bool = True) -> ComponentResult:
        """Find connected components at this snapshot."""
        return connected_components(self, directed=directed)

    def degree_distribution(self, direction: Literal["in", "out", "both"] = "both") -> Dict[int, int]:
        return degree_distribution(self, direction)

    def __repr__(self):
        self._load_graph()
        when_str = f"{self.when[0]} to {self.when[1]}" if self.is_interval() else self.when
        return f"Snapshot(when={when_str}, nodes={len(self._nodes)}, edges={len(self._edges)})"
