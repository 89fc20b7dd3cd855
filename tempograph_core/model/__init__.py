"""
TempoGraph Core Model

Typed domain objects for TempoGraph.
"""

from .base import (
    Entity,
    EntityType,
    Timestamp,
    FAR_FUTURE,
    FAR_PAST,
    TempoGraphError,
    ValidationError,
    DuplicateIdentityError,
    UnknownNodeError,
    DuplicateEdgeError,
    CyclicDependencyError,
    validate_oid,
    validate_timestamp,
    end_or_far_future,
    is_active_at,
    is_temporal_overlap,
    temporal_intersection,
)

from .nodes import (
    TemporalNode,
    SourceNode,
    ComputedNode,
    Formula,
    create_source_node,
    create_computed_node,
    is_source,
    is_computed,
)

from .edges import (
    TemporalEdge,
    edge_base_id,
    create_temporal_edge,
    is_temporal_edge,
)

__all__ = [
    # Base
    'Entity',
    'EntityType',
    'Timestamp',
    'FAR_FUTURE',
    'FAR_PAST',
    'validate_oid',
    'validate_timestamp',
    'end_or_far_future',
    'is_active_at',
    'is_temporal_overlap',
    'temporal_intersection',

    # Errors
    'TempoGraphError',
    'ValidationError',
    'DuplicateIdentityError',
    'UnknownNodeError',
    'DuplicateEdgeError',
    'CyclicDependencyError',

    # Nodes
    'TemporalNode',
    'SourceNode',
    'ComputedNode',
    'Formula',
    'create_source_node',
    'create_computed_node',
    'is_source',
    'is_computed',

    # Edges
    'TemporalEdge',
    'edge_base_id',
    'create_temporal_edge',
    'is_temporal_edge',
]
