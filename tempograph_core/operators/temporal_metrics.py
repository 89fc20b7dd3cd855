# File: tempograph_core/operators/temporal_metrics.py
"""
Temporal metrics over a TempoGraph.

Every function only aggregates answers from the query interface
(all_nodes, all_edges, active_at, edges_overlapping). Window-based rates and
ratios divide through window_length(), so an empty window (t1 <= t0)
yields 0.0 everywhere instead of an error.

Rates are expressed per minute; `unit` is how many timestamp units make a
minute (defaults to SETTINGS.minute_units, i.e. epoch milliseconds).
"""
from typing import Any, Dict, List, Optional

import numpy as np

from tempograph_core.model.base import Timestamp
from tempograph_core.model.edges import TemporalEdge
from tempograph_core.operators.interval_query import IntervalQueryEngine
from tempograph_core.utils.config import SETTINGS

window_length = IntervalQueryEngine.window_length


#========================================
# Helper functions
#========================================
def _edges_between(graph: Any, source: str, target: str) -> List[TemporalEdge]:
    return [e for e in graph.all_edges() if e.source == source and e.target == target]


def _touching(graph: Any, node_id: str) -> List[TemporalEdge]:
    return [e for e in graph.all_edges() if e.source == node_id or e.target == node_id]


def _overlapping_pairs(edges: List[TemporalEdge]) -> int:
    count = 0
    for i, a in enumerate(edges):
        for b in edges[i + 1:]:
            if a.overlaps_with(b.activated_at, b.end_time):
                count += 1
    return count


def _clipped_durations(edges: List[TemporalEdge], t0: Timestamp, t1: Timestamp) -> List[float]:
    """Length of each edge's interval inside [t0, t1]; open edges end at t1."""
    durations = []
    for e in edges:
        start = max(e.activated_at, t0)
        end = min(t1 if e.deactivated_at is None else e.deactivated_at, t1)
        durations.append(max(0.0, float(end - start)))
    return durations


def _minutes(t0: Timestamp, t1: Timestamp, unit: Optional[float]) -> float:
    unit = SETTINGS.minute_units if unit is None else unit
    return window_length(t0, t1) / unit


#========================================
# Edge metrics
#========================================
def edge_duration(edge: TemporalEdge, now: Timestamp) -> Timestamp:
    """Interval length of an edge; open edges are measured up to now."""
    return edge.duration(now)


def average_edge_duration_between(graph: Any, source: str, target: str, now: Timestamp) -> float:
    """Mean duration of every source -> target edge, 0.0 if there are none."""
    edges = _edges_between(graph, source, target)
    if not edges:
        return 0.0
    return float(np.mean([edge_duration(e, now) for e in edges]))


def edge_recurrence(graph: Any, source: str, target: str) -> int:
    """How many times the relation source -> target was recorded."""
    return len(_edges_between(graph, source, target))


#========================================
# Node metrics
#========================================
def temporal_degree(graph: Any, node_id: str, t0: Timestamp, t1: Timestamp) -> int:
    """Edges touching node_id that overlap [t0, t1]."""
    return sum(1 for e in graph.edges_overlapping(t0, t1) if e.source == node_id or e.target == node_id)


def node_lifespan(graph: Any, node_id: str) -> Timestamp:
    """Time between the first and last activation touching node_id, 0 if none."""
    times = [e.activated_at for e in _touching(graph, node_id)]
    if not times:
        return 0
    return max(times) - min(times)


def node_burstiness(graph: Any, node_id: str) -> float:
    """
    Barabasi burstiness B = (sigma - mu) / (sigma + mu) of the gaps between
    activations touching node_id. Close to 1 means bursty, -1 periodic.

    Needs at least three activations, otherwise 0.0.
    """
    times = sorted(e.activated_at for e in _touching(graph, node_id))
    if len(times) < 3:
        return 0.0

    gaps = np.diff(np.asarray(times, dtype=float))
    mean = gaps.mean()
    if mean == 0:
        return 0.0

    std = gaps.std()
    if std + mean == 0:
        return 0.0
    return float((std - mean) / (std + mean))


#========================================
# Graph metrics
#========================================
def temporal_density(graph: Any, t0: Timestamp, t1: Timestamp) -> float:
    """Edges overlapping [t0, t1] over n * (n - 1) possible directed edges."""
    n = len(graph.all_nodes())
    if n <= 1 or window_length(t0, t1) == 0:
        return 0.0
    return len(graph.edges_overlapping(t0, t1)) / (n * (n - 1))


def edge_overlap_count(graph: Any) -> int:
    """Number of edge pairs whose intervals overlap."""
    return _overlapping_pairs(graph.all_edges())


def interaction_velocity(graph: Any, t0: Timestamp, t1: Timestamp, unit: Optional[float] = None) -> float:
    """Edges overlapping [t0, t1] per minute of window."""
    minutes = _minutes(t0, t1, unit)
    if minutes == 0:
        return 0.0
    return len(graph.edges_overlapping(t0, t1)) / minutes


#========================================
# Temporal metrics
#========================================
def active_edge_count_at(graph: Any, time: Timestamp) -> int:
    return len(graph.active_at(time))


def total_active_time(graph: Any, t0: Timestamp, t1: Timestamp) -> float:
    """Sum of the time every edge spends active inside [t0, t1]."""
    if window_length(t0, t1) == 0:
        return 0.0
    return float(sum(_clipped_durations(graph.edges_overlapping(t0, t1), t0, t1)))


def average_active_duration(graph: Any, t0: Timestamp, t1: Timestamp) -> float:
    """Mean time an overlapping edge spends active inside [t0, t1]."""
    if window_length(t0, t1) == 0:
        return 0.0
    edges = graph.edges_overlapping(t0, t1)
    if not edges:
        return 0.0
    return float(np.mean(_clipped_durations(edges, t0, t1)))


def activations_in_interval(graph: Any, t0: Timestamp, t1: Timestamp) -> int:
    """Edges activated inside [t0, t1]."""
    return len(graph.queries.activations_between(t0, t1))


def deactivations_in_interval(graph: Any, t0: Timestamp, t1: Timestamp) -> int:
    """Edges deactivated inside [t0, t1]."""
    return len(graph.queries.deactivations_between(t0, t1))


def graph_alive_ratio(graph: Any, t0: Timestamp, t1: Timestamp) -> float:
    """total_active_time / window length."""
    width = window_length(t0, t1)
    if width == 0:
        return 0.0
    return total_active_time(graph, t0, t1) / width


def temporal_acceleration(graph: Any, t0: Timestamp, t1: Timestamp) -> int:
    """Change in the number of active edges from t0 to t1."""
    return active_edge_count_at(graph, t1) - active_edge_count_at(graph, t0)


def temporal_snapshot(graph: Any, time: Timestamp) -> Dict[str, list]:
    """All nodes plus the edges active at time."""
    return {
        'nodes': graph.all_nodes(),
        'active_edges': graph.active_at(time),
    }


def temporal_intensity(graph: Any, t0: Timestamp, t1: Timestamp, unit: Optional[float] = None) -> float:
    """Events (overlapping edges) per minute of window."""
    return interaction_velocity(graph, t0, t1, unit)


def activation_rhythm(graph: Any) -> float:
    """Mean gap between successive activations across the whole graph."""
    times = sorted(e.activated_at for e in graph.all_edges())
    if len(times) < 2:
        return 0.0
    return float(np.diff(np.asarray(times, dtype=float)).mean())


def temporal_overlap_ratio(graph: Any, t0: Timestamp, t1: Timestamp) -> float:
    """Share of pairs of edges in [t0, t1] whose intervals overlap each other."""
    if window_length(t0, t1) == 0:
        return 0.0
    edges = graph.edges_overlapping(t0, t1)
    if len(edges) <= 1:
        return 0.0
    total_pairs = len(edges) * (len(edges) - 1) / 2
    return _overlapping_pairs(edges) / total_pairs


def temporal_change_rate(graph: Any, t0: Timestamp, t1: Timestamp, unit: Optional[float] = None) -> float:
    """Activations plus deactivations inside [t0, t1], per minute."""
    minutes = _minutes(t0, t1, unit)
    if minutes == 0:
        return 0.0
    changes = activations_in_interval(graph, t0, t1) + deactivations_in_interval(graph, t0, t1)
    return changes / minutes
