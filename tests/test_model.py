"""
Tests for the TempoGraph model: interval helpers, edges and nodes.
"""

import math

import pytest

from tempograph_core.model import (
    FAR_FUTURE,
    FAR_PAST,
    ComputedNode,
    CyclicDependencyError,
    DuplicateIdentityError,
    SourceNode,
    TemporalEdge,
    TemporalNode,
    ValidationError,
    create_computed_node,
    create_source_node,
    create_temporal_edge,
    edge_base_id,
    is_active_at,
    is_computed,
    is_source,
    is_temporal_overlap,
    temporal_intersection,
    validate_timestamp,
)
from tempograph_core.engine.cache import EvaluationCache


# =============================================================================
# INTERVAL HELPERS
# =============================================================================

class TestIntervalHelpers:
    """Closed-interval semantics with None meaning open-ended."""

    def test_far_constants_are_infinite(self):
        assert FAR_FUTURE == math.inf
        assert FAR_PAST == -math.inf

    def test_is_active_at_is_inclusive(self):
        assert is_active_at(10, 20, 10)
        assert is_active_at(10, 20, 20)
        assert not is_active_at(10, 20, 9)
        assert not is_active_at(10, 20, 21)

    def test_open_interval_never_ends(self):
        assert is_active_at(10, None, 10 ** 12)

    def test_touching_intervals_overlap(self):
        assert is_temporal_overlap(10, 20, 20, 30)
        assert is_temporal_overlap(20, 30, 10, 20)
        assert not is_temporal_overlap(10, 19, 20, 30)

    def test_intersection(self):
        assert temporal_intersection(10, 20, 15, 30) == (15, 20)
        assert temporal_intersection(10, None, 15, 30) == (15, 30)
        assert temporal_intersection(10, 12, 15, 30) is None

    @pytest.mark.parametrize("value", ["5", None, True, float("nan")])
    def test_validate_timestamp_rejects(self, value):
        with pytest.raises(ValidationError):
            validate_timestamp(value)


# =============================================================================
# EDGES
# =============================================================================

class TestTemporalEdge:
    """TemporalEdge interval behaviour and identity."""

    def test_open_edge_end_time(self):
        edge = create_temporal_edge("e", "A", "B", activated_at=3)
        assert edge.is_open
        assert edge.end_time == FAR_FUTURE

    def test_created_at_defaults_to_activation(self):
        edge = create_temporal_edge("e", "A", "B", activated_at=3)
        assert edge.created_at == 3

        explicit = create_temporal_edge("e2", "A", "B", activated_at=3, created_at=1)
        assert explicit.created_at == 1

    def test_duration_uses_now_for_open_edges(self):
        closed = create_temporal_edge("e1", "A", "B", activated_at=10, deactivated_at=25)
        opened = create_temporal_edge("e2", "A", "B", activated_at=10)
        assert closed.duration(now=100) == 15
        assert opened.duration(now=100) == 90

    def test_edge_requires_endpoints(self):
        with pytest.raises(ValueError, match="source"):
            TemporalEdge(oid="e", source="", target="B")
        with pytest.raises(ValueError, match="target"):
            TemporalEdge(oid="e", source="A", target="")

    def test_edge_requires_oid(self):
        with pytest.raises(ValidationError):
            TemporalEdge(oid="", source="A", target="B")

    def test_base_id_is_deterministic(self):
        assert edge_base_id("A", "B", 10) == edge_base_id("A", "B", 10)
        assert edge_base_id("A", "B", 10) != edge_base_id("A", "B", 11)

    def test_equality_by_oid(self):
        a = create_temporal_edge("e", "A", "B", activated_at=1)
        b = create_temporal_edge("e", "C", "D", activated_at=2)
        assert a == b
        assert len({a, b}) == 1

    def test_to_dict(self):
        edge = create_temporal_edge("e", "A", "A", activated_at=1, deactivated_at=2, label="dep")
        data = edge.to_dict()
        assert data['source'] == "A"
        assert data['deactivated_at'] == 2
        assert edge.is_self_loop()
        assert str(edge) == "A-[dep]->A"


# =============================================================================
# NODES
# =============================================================================

class TestNodes:
    """Node wrapper and lazy payloads."""

    def test_node_requires_oid(self):
        with pytest.raises(ValidationError):
            TemporalNode(oid="", data=None)

    def test_payload_guards(self):
        source = TemporalNode(oid="S", data=create_source_node("S", 3))
        computed = TemporalNode(
            oid="C",
            data=create_computed_node("C", lambda *v: sum(v), EvaluationCache())
        )
        assert is_source(source) and not is_computed(source)
        assert is_computed(computed) and not is_source(computed)
        assert isinstance(source.data, SourceNode)
        assert isinstance(computed.data, ComputedNode)

    def test_computed_requires_callable(self):
        with pytest.raises(TypeError):
            create_computed_node("C", 42, EvaluationCache())

    def test_node_to_dict_uses_payload(self):
        node = TemporalNode(oid="S", data=create_source_node("S", 3))
        assert node.to_dict()['data'] == {'name': 'S', 'kind': 'SOURCE', 'value': 3}


# =============================================================================
# ERRORS
# =============================================================================

class TestErrors:

    def test_duplicate_identity_carries_context(self):
        err = DuplicateIdentityError("A", data="new", existing="old")
        assert err.oid == "A"
        assert "A" in str(err)

    def test_cycle_error_message(self):
        err = CyclicDependencyError(["A", "B", "A"], time=5)
        assert err.cycle == ["A", "B", "A"]
        assert "A -> B -> A" in str(err)
        assert err.time == 5
