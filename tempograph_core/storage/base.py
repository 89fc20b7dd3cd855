"""
TempoGraph Storage - Abstract Backend Interface

Defines the contract an entity store must implement: node and temporal edge
tables plus the outgoing-edge adjacency index.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Set

from tempograph_core.model.base import Timestamp
from tempograph_core.model.nodes import TemporalNode
from tempograph_core.model.edges import TemporalEdge

IdentityFn = Callable[[Any], str]


class StorageBackend(ABC):
    """
    Abstract interface for TempoGraph entity stores.

    Design principles:
    - Complete, in-memory, single writer
    - Node identity comes from a caller-supplied identity function
    - Nodes and edges are never removed; edges only get a deactivation time
    - Adjacency lists keep edge insertion order
    """

    def __init__(self, identity_fn: IdentityFn):
        if not callable(identity_fn):
            raise TypeError(f"identity_fn must be callable, got {type(identity_fn).__name__}")
        self.identity_fn = identity_fn

    # =========================================================================
    # Node Operations
    # =========================================================================

    @abstractmethod
    def insert_node(self, data: Any) -> TemporalNode:
        """
        Insert a node built from data.

        Raises:
            DuplicateIdentityError: If identity_fn(data) is already present
        """
        pass

    @abstractmethod
    def get_node(self, oid: str) -> Optional[TemporalNode]:
        """
        Get a node by ID.

        Returns:
            Node if found, None otherwise
        """
        pass

    @abstractmethod
    def has_node(self, oid: str) -> bool:
        """Check if node exists"""
        pass

    @abstractmethod
    def all_nodes(self) -> List[TemporalNode]:
        """Snapshot list of every node."""
        pass

    # =========================================================================
    # Edge Operations
    # =========================================================================

    @abstractmethod
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

        Raises:
            UnknownNodeError: If either endpoint is absent
            DuplicateEdgeError: If an explicit oid is already used
        """
        pass

    @abstractmethod
    def get_edge(self, oid: str) -> Optional[TemporalEdge]:
        """Get an edge by ID, None if absent."""
        pass

    @abstractmethod
    def deactivate_edge(self, oid: str, at: Timestamp) -> None:
        """
        Set the edge's deactivation time.

        Unknown oids are ignored so deactivation stays idempotent.
        """
        pass

    @abstractmethod
    def all_edges(self) -> List[TemporalEdge]:
        """Snapshot list of every edge."""
        pass

    @abstractmethod
    def outgoing_edges(self, oid: str) -> List[TemporalEdge]:
        """
        Edges indexed under oid as source, all times, insertion order.

        Raises:
            UnknownNodeError: If node is absent
        """
        pass

    @abstractmethod
    def ancestors(self, oid: str) -> Set[str]:
        """
        Every node with a path to oid, over edges of any time.

        Raises:
            UnknownNodeError: If node is absent
        """
        pass

    # =========================================================================
    # Statistics
    # =========================================================================

    @abstractmethod
    def count_nodes(self) -> int:
        pass

    @abstractmethod
    def count_edges(self) -> int:
        pass

    def stats(self) -> Dict[str, Any]:
        """Get backend statistics"""
        return {
            'backend': type(self).__name__,
            'nodes': self.count_nodes(),
            'edges': self.count_edges(),
        }

    # =========================================================================
    # Helpers
    # =========================================================================

    def resolve_oid(self, ref: Any) -> str:
        """
        Node reference -> oid.

        Strings are taken as oids, anything else goes through identity_fn.
        """
        return ref if isinstance(ref, str) else self.identity_fn(ref)
