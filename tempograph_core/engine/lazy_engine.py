"""
Lazy Graph Engine - time-scoped, memoized evaluation over a TempoGraph.

Nodes are SOURCE (fixed value) or COMPUTED (formula over dependencies).
An edge A -> B means "A depends on B": evaluating A at time t pulls the
value of every B whose edge is active at t, then applies A's formula.

Evaluation contract:
- At most one formula call per (node, time) while the cache holds the entry.
- Dependency values reach the formula in edge enumeration (insertion) order.
- Re-entering a (node, time) pair that is still being evaluated raises
  CyclicDependencyError instead of recursing forever.
- Graph mutation never invalidates anything. A cached value for time t is
  stale once the dependencies active at t change; call invalidate() (single
  node, no cascade) or invalidate_dependents() (node plus everything that
  depends on it).
"""

import logging
from typing import List, Optional, Set, Tuple

from tempograph_core.engine.cache import EvaluationCache
from tempograph_core.model.base import (
    Timestamp, CyclicDependencyError, UnknownNodeError, ValidationError, validate_timestamp,
)
from tempograph_core.model.edges import TemporalEdge
from tempograph_core.model.nodes import (
    ComputedNode, Formula, SourceNode, TemporalNode,
    create_computed_node, create_source_node,
)
from tempograph_core.tempograph.tempograph import TempoGraph
from tempograph_core.utils.config import SETTINGS

logger = logging.getLogger(__name__)

_MISSING = object()


def _node_name(data) -> str:
    return data.name


class LazyGraphEngine:
    """
    Memoized evaluator over a temporal dependency graph.

    Example:
        engine = LazyGraphEngine()
        engine.create_source('Salary', 1000)
        engine.create_source('Bonus', 500)
        engine.create_computed('TotalIncome', lambda *values: sum(values))

        engine.add_dependency('TotalIncome', 'Salary', 0)
        engine.add_dependency('TotalIncome', 'Bonus', 11)

        engine.value_at('TotalIncome', 5)    # 1000
        engine.value_at('TotalIncome', 15)   # 1500
        engine.value_at('TotalIncome', 5)    # 1000, from cache
    """

    def __init__(self, cache_max_entries: Optional[int] = None):
        """
        Args:
            cache_max_entries: Per-node cache bound (LRU). None falls back to
                SETTINGS.cache_max_entries. 0 means never evict.
        """
        if cache_max_entries is None:
            cache_max_entries = SETTINGS.cache_max_entries
        if cache_max_entries < 0:
            raise ValidationError(f"cache_max_entries cannot be negative, got {cache_max_entries}")
        self.cache_max_entries = cache_max_entries or None

        self.graph = TempoGraph(identity_fn=_node_name)

        # (node, time) pairs currently being evaluated, outermost first
        self._in_progress: List[Tuple[str, Timestamp]] = []
        self._in_progress_keys: Set[Tuple[str, Timestamp]] = set()

    # =========================================================================
    # BUILDING
    # =========================================================================

    def create_source(self, name: str, value: float) -> TemporalNode:
        """Add a fixed-value input node."""
        return self.graph.insert_node(create_source_node(name, value))

    def create_computed(self, name: str, formula: Formula) -> TemporalNode:
        """Add a formula node with an empty cache."""
        cache = EvaluationCache(max_entries=self.cache_max_entries)
        return self.graph.insert_node(create_computed_node(name, formula, cache))

    def add_dependency(
        self,
        dependent: str,
        dependency: str,
        start_at: Timestamp,
        end_at: Optional[Timestamp] = None
    ) -> TemporalEdge:
        """
        Make dependent read dependency's value during [start_at, end_at].

        Raises:
            UnknownNodeError: If either node is absent
        """
        return self.graph.add_edge(dependent, dependency, start_at, deactivated_at=end_at)

    def deactivate_dependency(self, edge_oid: str, at: Timestamp) -> None:
        """End a dependency at `at`. Unknown oids are ignored; caches are untouched."""
        self.graph.deactivate_edge(edge_oid, at)

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def value_at(self, oid: str, time: Timestamp) -> float:
        """
        Value of oid at time.

        Raises:
            UnknownNodeError: If oid (or any active dependency) is absent
            CyclicDependencyError: If an active dependency cycle exists at time
        """
        validate_timestamp(time, "time")
        return self._evaluate(oid, time)

    def _evaluate(self, oid: str, time: Timestamp) -> float:
        node = self.graph.get_node(oid)
        if node is None:
            raise UnknownNodeError(oid)

        payload = node.data
        if isinstance(payload, SourceNode):
            return payload.value
        if not isinstance(payload, ComputedNode):
            raise ValidationError(f"Node {oid} holds no source or computed payload")

        cached = payload.cache.get(time, _MISSING)
        if cached is not _MISSING:
            logger.debug(f"[CACHE] {oid} (t={time}) returned {cached}")
            return cached

        key = (oid, time)
        if key in self._in_progress_keys:
            start = self._in_progress.index(key)
            cycle = [name for name, _ in self._in_progress[start:]] + [oid]
            raise CyclicDependencyError(cycle, time)

        logger.debug(f"[CALC] computing {oid} at t={time}")
        self._in_progress.append(key)
        self._in_progress_keys.add(key)
        try:
            edges = self.graph.active_outgoing(oid, time)
            values = [self._evaluate(edge.target, time) for edge in edges]
            result = payload.formula(*values)
        finally:
            self._in_progress.pop()
            self._in_progress_keys.discard(key)

        payload.cache.put(time, result)
        return result

    # =========================================================================
    # CACHE MANAGEMENT
    # =========================================================================

    def invalidate(self, oid: str) -> None:
        """
        Clear every cached timestamp of oid.

        No cascade: computed nodes that cached values derived from oid keep
        them. Unknown nodes and sources are ignored.
        """
        node = self.graph.get_node(oid)
        if node is None or not isinstance(node.data, ComputedNode):
            logger.debug(f"Nothing to invalidate for {oid}")
            return
        node.data.cache.clear()
        logger.info(f"Invalidated cache of {oid}")

    def invalidate_dependents(self, oid: str) -> List[str]:
        """
        Clear oid and every computed node depending on it, directly or
        transitively, through edges of any time.

        Returns:
            Sorted oids whose cache was cleared

        Raises:
            UnknownNodeError: If oid is absent
        """
        cleared = []
        for name in sorted({oid} | self.graph.ancestors(oid)):
            payload = self.graph.get_node(name).data
            if isinstance(payload, ComputedNode):
                payload.cache.clear()
                cleared.append(name)
        logger.info(f"Invalidated {len(cleared)} cache(s) depending on {oid}")
        return cleared

    def cached_times(self, oid: str) -> List[Timestamp]:
        """
        Timestamps currently cached for oid ([] for sources).

        Raises:
            UnknownNodeError: If oid is absent
        """
        node = self.graph.get_node(oid)
        if node is None:
            raise UnknownNodeError(oid)
        if not isinstance(node.data, ComputedNode):
            return []
        return node.data.cache.times()

    def __repr__(self) -> str:
        return f"LazyGraphEngine({self.graph!r})"
