"""
Temporal Traversal - time-respecting paths over the adjacency index.

A walk may leave a node reached at time tau only through an edge with
activated_at >= tau; crossing the edge moves the walker to its activation
time. Paths are therefore non-decreasing in activation order.

Optimality: earliest arrival. Among all time-respecting paths the search
returns one that reaches the target earliest, then the one with the fewest
hops, then the first in edge enumeration order.

Labels (arrival, hops) are expanded in lexicographic order. A node keeps
every label not dominated by one already expanded there (earlier or equal
arrival with no more hops), since a later arrival may still be the
fewer-hop route to the target.
"""

import heapq
from itertools import count
from typing import Dict, List, Optional, Tuple

from tempograph_core.model.base import Timestamp, FAR_PAST, UnknownNodeError, validate_timestamp
from tempograph_core.storage.base import StorageBackend


def _ensure_node_exists(storage: StorageBackend, oid: str) -> None:
    if not storage.has_node(oid):
        raise UnknownNodeError(oid)


def _dominated(labels: List[Tuple[Timestamp, int]], arrival: Timestamp, hops: int) -> bool:
    return any(a <= arrival and h <= hops for a, h in labels)


def time_respecting_path(
    storage: StorageBackend,
    start: str,
    end: str,
    start_time: Timestamp = FAR_PAST,
) -> Optional[List[str]]:
    """
    Earliest-arrival time-respecting path from start to end.

    Args:
        storage: Entity store to walk
        start: Source node oid
        end: Target node oid
        start_time: Time the walker is at start (default: -inf)

    Returns:
        Node oids from start to end, or None when end is unreachable

    Raises:
        UnknownNodeError: If start or end is absent
    """
    _ensure_node_exists(storage, start)
    _ensure_node_exists(storage, end)
    validate_timestamp(start_time, "start_time")

    if start == end:
        return [start]

    tie = count()
    # (arrival, hops, tie-breaker, node, path)
    frontier = [(start_time, 0, next(tie), start, [start])]
    expanded: Dict[str, List[Tuple[Timestamp, int]]] = {}

    while frontier:
        arrival, hops, _, node, path = heapq.heappop(frontier)
        if _dominated(expanded.get(node, []), arrival, hops):
            continue
        expanded.setdefault(node, []).append((arrival, hops))

        if node == end:
            return path

        for edge in storage.outgoing_edges(node):
            if edge.activated_at < arrival:
                continue
            if not _dominated(expanded.get(edge.target, []), edge.activated_at, hops + 1):
                heapq.heappush(
                    frontier,
                    (edge.activated_at, hops + 1, next(tie), edge.target, path + [edge.target])
                )

    return None


def earliest_arrival_times(
    storage: StorageBackend,
    start: str,
    start_time: Timestamp = FAR_PAST,
) -> Dict[str, Timestamp]:
    """
    Earliest arrival time of every node reachable from start.

    start itself maps to start_time.

    Raises:
        UnknownNodeError: If start is absent
    """
    _ensure_node_exists(storage, start)
    validate_timestamp(start_time, "start_time")

    tie = count()
    frontier = [(start_time, next(tie), start)]
    arrivals: Dict[str, Timestamp] = {}

    while frontier:
        arrival, _, node = heapq.heappop(frontier)
        if node in arrivals:
            continue
        arrivals[node] = arrival

        for edge in storage.outgoing_edges(node):
            if edge.activated_at >= arrival and edge.target not in arrivals:
                heapq.heappush(frontier, (edge.activated_at, next(tie), edge.target))

    return arrivals
