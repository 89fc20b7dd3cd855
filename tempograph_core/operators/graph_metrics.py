"""
Structural metrics of one Snapshot, read off its networkx export.

Snapshot exposes them as methods (tg.snapshot(15).density()); the
functions here take any object with count_nodes/count_edges/to_networkx.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Set

import networkx as nx


@dataclass
class ComponentResult:
    """Node-oid sets, one per component of a snapshot."""
    components: List[Set[str]]

    @property
    def count(self) -> int:
        return len(self.components)

    @property
    def sizes(self) -> List[int]:
        """Largest first."""
        return sorted((len(c) for c in self.components), reverse=True)

    @property
    def biggest(self) -> int:
        return self.sizes[0] if self.components else 0

    @property
    def smallest(self) -> int:
        return self.sizes[-1] if self.components else 0

    def get_component(self, node_id: str) -> Optional[Set[str]]:
        """Component holding node_id, None if the node is not in the snapshot."""
        return next((comp for comp in self.components if node_id in comp), None)


def density(snapshot: Any, directed: bool = True) -> float:
    """
    Edges in the snapshot over the possible n * (n - 1) ordered pairs
    (half that when undirected).

    Parallel edges and self-loops count like any other, so a snapshot of
    recurring dependencies can exceed 1.0. Fewer than two nodes gives 0.0.
    """
    nodes = snapshot.count_nodes()
    if nodes <= 1:
        return 0.0

    pairs = nodes * (nodes - 1)
    if not directed:
        pairs //= 2
    return snapshot.count_edges() / pairs


def connected_components(snapshot: Any, directed: bool = True) -> ComponentResult:
    """
    Strongly connected components when directed, weakly connected ones
    otherwise. Every snapshot node appears in exactly one component.
    """
    g = snapshot.to_networkx()
    if g.number_of_nodes() == 0:
        return ComponentResult(components=[])

    if directed:
        comps = nx.strongly_connected_components(g)
    else:
        comps = nx.weakly_connected_components(g)
    return ComponentResult(components=[set(c) for c in comps])


def degree_distribution(
    snapshot: Any,
    direction: Literal["in", "out", "both"] = "both",
) -> Dict[int, int]:
    """
    degree -> number of snapshot nodes with that degree.

    direction picks in-, out- or total degree; a self-loop adds 2 to the
    total.
    """
    if direction not in ("in", "out", "both"):
        raise ValueError("direction must be 'in', 'out', or 'both'")

    g = snapshot.to_networkx()
    if direction == "out":
        degrees = g.out_degree()
    elif direction == "in":
        degrees = g.in_degree()
    else:
        degrees = g.degree()

    distribution: Dict[int, int] = {}
    for _, degree in degrees:
        distribution[degree] = distribution.get(degree, 0) + 1

    return distribution
