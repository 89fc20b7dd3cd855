"""
TempoGraph Core Model - Nodes

TemporalNode wraps caller data under an identity computed by the store.
SourceNode and ComputedNode are the two payloads understood by the lazy
evaluation engine.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tempograph_core.engine.cache import EvaluationCache

from .base import Entity, EntityType, validate_oid

Formula = Callable[..., float]


# =============================================================================
# TemporalNode
# =============================================================================

@dataclass(eq=False)
class TemporalNode(Entity):
    """
    Node of a temporal graph.

    The oid is derived from data by the store's identity function and is
    unique within the store. Nodes are never deleted.

    Example:
        node = TemporalNode(oid="Salary", data=SourceNode("Salary", 1000))
    """

    data: Any = None

    def __post_init__(self):
        validate_oid(self.oid)

    def entity_type(self) -> EntityType:
        """Return entity type"""
        return EntityType.NODE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = self.data.to_dict() if hasattr(self.data, 'to_dict') else self.data
        return {
            'oid': self.oid,
            'type': self.entity_type().value,
            'data': data,
        }

    def __repr__(self) -> str:
        return f"TemporalNode(oid={self.oid})"

    def __str__(self) -> str:
        return f"Node: {self.oid}"


# =============================================================================
# Lazy evaluation payloads
# =============================================================================

@dataclass
class SourceNode:
    """
    Fixed-value input. Insensitive to time, never cached.
    """

    name: str
    value: float = 0

    @property
    def kind(self) -> str:
        return "SOURCE"

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'kind': self.kind, 'value': self.value}


@dataclass
class ComputedNode:
    """
    Formula over the values of the dependencies active at evaluation time.

    formula receives one positional argument per active dependency, in edge
    enumeration order, and may receive none at all. Results are memoized in
    cache, keyed by evaluation timestamp.
    """

    name: str
    formula: Formula
    cache: Optional['EvaluationCache'] = field(default=None, repr=False)

    @property
    def kind(self) -> str:
        return "COMPUTED"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'kind': self.kind,
            'cached_times': self.cache.times() if self.cache is not None else [],
        }


# =============================================================================
# Factory Functions
# =============================================================================

def create_source_node(name: str, value: float) -> SourceNode:
    """Factory function to create a SourceNode."""
    return SourceNode(name=name, value=value)


def create_computed_node(
        name: str,
        formula: Formula,
        cache: 'EvaluationCache'
) -> ComputedNode:
    """
    Factory function to create a ComputedNode with its (empty) cache.
    """
    if not callable(formula):
        raise TypeError(f"formula must be callable, got {type(formula).__name__}")
    return ComputedNode(name=name, formula=formula, cache=cache)


# =============================================================================
# Type Guards
# =============================================================================

def is_source(node: TemporalNode) -> bool:
    """Check if node holds a SourceNode payload"""
    return isinstance(node.data, SourceNode)


def is_computed(node: TemporalNode) -> bool:
    """Check if node holds a ComputedNode payload"""
    return isinstance(node.data, ComputedNode)
