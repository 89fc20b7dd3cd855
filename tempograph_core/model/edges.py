"""
TempoGraph Core Model - Edges

TemporalEdge: a directed edge that exists during its activation interval.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import (
    Entity, EntityType, Timestamp,
    validate_oid, end_or_far_future, is_active_at, is_temporal_overlap,
)


# =============================================================================
# TemporalEdge
# =============================================================================

@dataclass(eq=False)
class TemporalEdge(Entity):
    """
    Directed edge with an activation interval.

    The edge exists during [activated_at, deactivated_at]; deactivated_at=None
    means "active until further notice" and compares as FAR_FUTURE.
    activated_at <= deactivated_at is assumed, not validated.

    Example:
        edge = TemporalEdge(
            oid="A->B@10",
            source="A",
            target="B",
            created_at=10,
            activated_at=10,
            deactivated_at=20
        )
        edge.is_active_at(20)   # True
        edge.is_active_at(22)   # False
    """

    source: str = ""
    target: str = ""
    created_at: Timestamp = 0
    activated_at: Timestamp = 0
    deactivated_at: Optional[Timestamp] = None
    data: Any = None
    label: Optional[str] = None

    def __post_init__(self):
        validate_oid(self.oid)

        if not self.source:
            raise ValueError("Edge must have a source")
        if not self.target:
            raise ValueError("Edge must have a target")

    def entity_type(self) -> EntityType:
        """Return entity type"""
        return EntityType.EDGE

    # -------------------------------------------------------------------------
    # Interval
    # -------------------------------------------------------------------------

    @property
    def end_time(self) -> Timestamp:
        """deactivated_at, or FAR_FUTURE while the edge is open."""
        return end_or_far_future(self.deactivated_at)

    @property
    def is_open(self) -> bool:
        """True while no deactivation time has been set."""
        return self.deactivated_at is None

    def is_active_at(self, time: Timestamp) -> bool:
        """Check if the edge exists at time (both bounds inclusive)."""
        return is_active_at(self.activated_at, self.deactivated_at, time)

    def overlaps_with(self, start: Timestamp, end: Timestamp) -> bool:
        """Check if the activation interval intersects [start, end]."""
        return is_temporal_overlap(self.activated_at, self.deactivated_at, start, end)

    def duration(self, now: Timestamp) -> Timestamp:
        """Interval length, measuring open edges up to now."""
        end = now if self.deactivated_at is None else self.deactivated_at
        return end - self.activated_at

    def is_self_loop(self) -> bool:
        """Check if edge is a self-loop"""
        return self.source == self.target

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'oid': self.oid,
            'source': self.source,
            'target': self.target,
            'label': self.label,
            'type': self.entity_type().value,
            'created_at': self.created_at,
            'activated_at': self.activated_at,
            'deactivated_at': self.deactivated_at,
            'data': self.data,
        }

    # -------------------------------------------------------------------------
    # String Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        end = "∞" if self.deactivated_at is None else self.deactivated_at
        return (
            f"TemporalEdge(oid={self.oid}, "
            f"{self.source}->{self.target}, [{self.activated_at}, {end}])"
        )

    def __str__(self) -> str:
        if self.label:
            return f"{self.source}-[{self.label}]->{self.target}"
        return f"{self.source}->{self.target}"


# =============================================================================
# Identity
# =============================================================================

def edge_base_id(source: str, target: str, activated_at: Timestamp) -> str:
    """
    Deterministic base identity of an edge.

    Edges sharing (source, target, activated_at) share this base; the store
    appends a '#n' suffix to keep them distinct.
    """
    return f"{source}->{target}@{activated_at}"


# =============================================================================
# Factory Functions
# =============================================================================

def create_temporal_edge(
        oid: str,
        source: str,
        target: str,
        activated_at: Timestamp,
        deactivated_at: Optional[Timestamp] = None,
        created_at: Optional[Timestamp] = None,
        data: Any = None,
        label: Optional[str] = None
) -> TemporalEdge:
    """
    Factory function to create a TemporalEdge.

    created_at defaults to activated_at; nothing reads the wall clock.
    """
    return TemporalEdge(
        oid=oid,
        source=source,
        target=target,
        created_at=activated_at if created_at is None else created_at,
        activated_at=activated_at,
        deactivated_at=deactivated_at,
        data=data,
        label=label
    )


# =============================================================================
# Type Guards
# =============================================================================

def is_temporal_edge(entity: Entity) -> bool:
    """Check if entity is a TemporalEdge"""
    return isinstance(entity, TemporalEdge)
