"""
TempoGraph Storage - In-Memory Backend (NetworkX)

Memory-based entity store using:
- NetworkX MultiDiGraph for graph structure (edge key = edge oid)
- An ordered adjacency index: node oid -> outgoing edge oids

Fast, no persistence. All mutation is in place and unguarded; callers that
share a store across threads must serialize access themselves.
"""

import logging
from typing import Any, Dict, List, Optional, Set

import networkx as nx

from .base import StorageBackend, IdentityFn
from tempograph_core.model.base import (
    Timestamp, DuplicateIdentityError, UnknownNodeError, DuplicateEdgeError,
    validate_timestamp,
)
from tempograph_core.model.nodes import TemporalNode
from tempograph_core.model.edges import TemporalEdge, create_temporal_edge, edge_base_id

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """
    In-memory entity store backed by NetworkX.

    Data is stored in:
    - self.graph: NetworkX MultiDiGraph for nodes and edges
    - self._edges: edge oid -> TemporalEdge
    - self._adjacency: node oid -> outgoing edge oids, insertion order

    Example:
        storage = MemoryStorage(identity_fn=lambda d: d)
        storage.insert_node('A')
        storage.insert_node('B')
        edge = storage.add_edge('A', 'B', activated_at=10, deactivated_at=20)
        storage.outgoing_edges('A')   # [edge]
    """

    def __init__(self, identity_fn: IdentityFn):
        """Initialize memory storage"""
        super().__init__(identity_fn)

        # Graph storage (NetworkX)
        self.graph = nx.MultiDiGraph()

        self._edges: Dict[str, TemporalEdge] = {}
        self._adjacency: Dict[str, List[str]] = {}

    # =========================================================================
    # Node Operations
    # =========================================================================

    def insert_node(self, data: Any) -> TemporalNode:
        """Insert a node, identity computed from data"""
        oid = self.identity_fn(data)

        existing = self.get_node(oid)
        if existing is not None:
            raise DuplicateIdentityError(oid, data, existing.data)

        node = TemporalNode(oid=oid, data=data)

        self.graph.add_node(oid, data=node)
        self._adjacency.setdefault(oid, [])

        logger.debug(f"Inserted node {oid}")
        return node

    def bulk_insert_nodes(self, items: List[Any]) -> List[TemporalNode]:
        """Insert several nodes; stops at the first duplicate."""
        return [self.insert_node(data) for data in items]

    def get_node(self, oid: str) -> Optional[TemporalNode]:
        """Get a node by ID"""
        if not self.has_node(oid):
            return None
        return self.graph.nodes[oid]['data']

    def has_node(self, oid: str) -> bool:
        """Check if node exists"""
        return self.graph.has_node(oid)

    def all_nodes(self) -> List[TemporalNode]:
        return [data['data'] for _, data in self.graph.nodes(data=True)]

    def _ensure_node_exists(self, oid: str) -> None:
        if not self.has_node(oid):
            raise UnknownNodeError(oid)

    # =========================================================================
    # Edge Operations
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
        """Insert a temporal edge"""
        source_id = self.resolve_oid(source)
        target_id = self.resolve_oid(target)

        self._ensure_node_exists(source_id)
        self._ensure_node_exists(target_id)
        validate_timestamp(activated_at, "activated_at")
        if deactivated_at is not None:
            validate_timestamp(deactivated_at, "deactivated_at")

        if oid is None:
            oid = self._next_edge_id(source_id, target_id, activated_at)
        elif oid in self._edges:
            raise DuplicateEdgeError(oid)

        edge = create_temporal_edge(
            oid=oid,
            source=source_id,
            target=target_id,
            activated_at=activated_at,
            deactivated_at=deactivated_at,
            created_at=created_at,
            data=data,
            label=label
        )

        self.graph.add_edge(source_id, target_id, key=oid, data=edge)
        self._edges[oid] = edge
        self._adjacency[source_id].append(oid)

        logger.debug(f"Inserted edge {oid}")
        return edge

    def _next_edge_id(self, source: str, target: str, activated_at: Timestamp) -> str:
        """Base identity, suffixed with '#n' when the base is taken."""
        base = edge_base_id(source, target, activated_at)
        if base not in self._edges:
            return base

        n = 1
        while f"{base}#{n}" in self._edges:
            n += 1
        logger.warning(f"Edge {base} already exists, storing as {base}#{n}")
        return f"{base}#{n}"

    def get_edge(self, oid: str) -> Optional[TemporalEdge]:
        """Get an edge by ID"""
        return self._edges.get(oid)

    def edge_exists(self, oid: str) -> bool:
        return oid in self._edges

    def deactivate_edge(self, oid: str, at: Timestamp) -> None:
        """Set deactivated_at in place; unknown oids are ignored"""
        edge = self._edges.get(oid)
        if edge is None:
            logger.debug(f"Ignoring deactivation of unknown edge {oid}")
            return
        validate_timestamp(at, "at")
        edge.deactivated_at = at

    def all_edges(self) -> List[TemporalEdge]:
        return list(self._edges.values())

    def outgoing_edges(self, oid: str) -> List[TemporalEdge]:
        """Outgoing edges of a node, all times, insertion order"""
        self._ensure_node_exists(oid)
        return [self._edges[edge_id] for edge_id in self._adjacency.get(oid, [])]

    def ancestors(self, oid: str) -> Set[str]:
        """Nodes with a path to oid in the MultiDiGraph, all times"""
        self._ensure_node_exists(oid)
        return set(nx.ancestors(self.graph, oid))

    # =========================================================================
    # Statistics
    # =========================================================================

    def count_nodes(self) -> int:
        """Count nodes"""
        return self.graph.number_of_nodes()

    def count_edges(self) -> int:
        """Count edges"""
        return self.graph.number_of_edges()

    def __repr__(self) -> str:
        """String representation"""
        return (
            f"MemoryStorage(nodes={self.count_nodes()}, "
            f"edges={self.count_edges()})"
        )


def create_memory_storage(identity_fn: IdentityFn) -> MemoryStorage:
    """Factory function to create MemoryStorage"""
    return MemoryStorage(identity_fn)
