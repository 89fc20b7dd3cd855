"""
TempoGraph Core Model - Base Classes

Time constants, interval helpers, the Entity base class and the exception
hierarchy shared by every TempoGraph component.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

# =============================================================================
# Constants
# =============================================================================

Timestamp = Union[int, float]

FAR_FUTURE: float = math.inf
FAR_PAST: float = -math.inf


# =============================================================================
# Enums
# =============================================================================

class EntityType(Enum):
    """Type of entity in TempoGraph"""
    NODE = "TemporalNode"
    EDGE = "TemporalEdge"


# =============================================================================
# Base Entity
# =============================================================================

@dataclass
class Entity(ABC):
    """
    Base class for all TempoGraph entities.

    All entities have a unique identifier (oid). Equality and hashing go
    through the oid only.
    """

    oid: str = ""

    @abstractmethod
    def entity_type(self) -> EntityType:
        """Return the type of this entity"""
        pass

    def __hash__(self) -> int:
        """Make entity hashable by oid"""
        return hash(self.oid)

    def __eq__(self, other: object) -> bool:
        """Compare entities by oid"""
        if not isinstance(other, Entity):
            return False
        return self.oid == other.oid


# =============================================================================
# Exceptions
# =============================================================================

class TempoGraphError(Exception):
    """Base exception for TempoGraph operations."""
    pass


class ValidationError(TempoGraphError):
    """Raised when an argument or entity fails validation"""
    pass


class DuplicateIdentityError(TempoGraphError):
    """Raised when inserting a node whose identity is already present."""

    def __init__(self, oid: str, data: Any = None, existing: Any = None):
        self.oid = oid
        self.data = data
        self.existing = existing
        super().__init__(f"Node already exists: {oid}")


class UnknownNodeError(TempoGraphError):
    """Raised when a node oid is not in the graph."""

    def __init__(self, oid: str):
        self.oid = oid
        super().__init__(f"Node doesn't exist: {oid}")


class DuplicateEdgeError(TempoGraphError):
    """Raised when an explicit edge oid is already taken."""

    def __init__(self, oid: str):
        self.oid = oid
        super().__init__(f"Edge already exists: {oid}")


class CyclicDependencyError(TempoGraphError):
    """
    Raised when evaluation re-enters a node that is still being computed
    for the same timestamp.

    ``cycle`` holds the node sequence, first and last entries equal,
    e.g. ``['A', 'B', 'A']``.
    """

    def __init__(self, cycle: List[str], time: Timestamp):
        self.cycle = list(cycle)
        self.time = time
        path = " -> ".join(self.cycle)
        super().__init__(f"Cyclic dependency at t={time}: {path}")


# =============================================================================
# Validation
# =============================================================================

def validate_oid(oid: str) -> None:
    """
    Validate entity ID.

    Raises:
        ValidationError: If oid is empty or invalid
    """
    if not oid or not isinstance(oid, str):
        raise ValidationError(f"Invalid oid: {oid!r}")


def validate_timestamp(value: Any, name: str = "timestamp") -> None:
    """
    Validate that value can be compared as a timestamp.

    Raises:
        ValidationError: If value is not a real number (bools are rejected)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    if math.isnan(value):
        raise ValidationError(f"{name} cannot be NaN")


# =============================================================================
# Utility Functions
# =============================================================================

def end_or_far_future(end: Optional[Timestamp]) -> Timestamp:
    """Open intervals (end=None) extend to FAR_FUTURE."""
    return FAR_FUTURE if end is None else end


def is_active_at(start: Timestamp, end: Optional[Timestamp], time: Timestamp) -> bool:
    """Check if [start, end] contains time. Both bounds inclusive."""
    return start <= time <= end_or_far_future(end)


def is_temporal_overlap(
        start1: Timestamp, end1: Optional[Timestamp],
        start2: Timestamp, end2: Optional[Timestamp]
) -> bool:
    """
    Check if two closed periods overlap. Touching endpoints count.

    Args:
        start1, end1: First period (end None = open)
        start2, end2: Second period (end None = open)

    Returns:
        True if periods overlap
    """
    return end_or_far_future(end1) >= start2 and end_or_far_future(end2) >= start1


def temporal_intersection(
        start1: Timestamp, end1: Optional[Timestamp],
        start2: Timestamp, end2: Optional[Timestamp]
) -> Optional[Tuple[Timestamp, Timestamp]]:
    """
    Compute intersection of two temporal periods.

    Returns:
        (start, end) of intersection, or None if no overlap
    """
    if not is_temporal_overlap(start1, end1, start2, end2):
        return None

    return (max(start1, start2), min(end_or_far_future(end1), end_or_far_future(end2)))
