"""
Tests for the lazy evaluation engine and its per-node cache.
"""

import pytest

from tempograph_core import (
    CyclicDependencyError,
    DuplicateIdentityError,
    EvaluationCache,
    LazyGraphEngine,
    UnknownNodeError,
    ValidationError,
)


def add(*values):
    return sum(values)


# =============================================================================
# EVALUATION
# =============================================================================

class TestValueAt:
    """Time-scoped evaluation over active dependencies."""

    def test_only_active_dependencies_count(self, income_engine):
        assert income_engine.value_at("TotalIncome", 5) == 1000
        assert income_engine.value_at("TotalIncome", 15) == 1500

    def test_activation_is_inclusive(self, income_engine):
        assert income_engine.value_at("TotalIncome", 10) == 1000
        assert income_engine.value_at("TotalIncome", 11) == 1500

    def test_source_returns_its_value(self, income_engine):
        assert income_engine.value_at("Salary", 5) == 1000
        assert income_engine.value_at("Salary", -100) == 1000

    def test_no_active_dependencies(self):
        engine = LazyGraphEngine()
        engine.create_computed("Empty", add)
        assert engine.value_at("Empty", 0) == 0

    def test_formula_receives_edge_order(self):
        engine = LazyGraphEngine()
        engine.create_source("X", 10)
        engine.create_source("Y", 3)
        engine.create_computed("Diff", lambda a, b: a - b)
        engine.add_dependency("Diff", "X", 0)
        engine.add_dependency("Diff", "Y", 0)

        assert engine.value_at("Diff", 1) == 7

    def test_nested_computed_nodes(self, income_engine):
        income_engine.create_computed("Tax", lambda income: income * 0.2)
        income_engine.add_dependency("Tax", "TotalIncome", 0)

        assert income_engine.value_at("Tax", 15) == pytest.approx(300.0)

    def test_dependency_window_end(self):
        engine = LazyGraphEngine()
        engine.create_source("S", 4)
        engine.create_computed("C", add)
        engine.add_dependency("C", "S", 0, end_at=10)

        assert engine.value_at("C", 10) == 4
        assert engine.value_at("C", 11) == 0

    def test_deactivate_dependency(self):
        engine = LazyGraphEngine()
        engine.create_source("S", 4)
        engine.create_computed("C", add)
        edge = engine.add_dependency("C", "S", 0)

        engine.deactivate_dependency(edge.oid, 5)
        engine.deactivate_dependency("unknown", 5)

        assert engine.value_at("C", 6) == 0

    def test_unknown_node(self, income_engine):
        with pytest.raises(UnknownNodeError):
            income_engine.value_at("Nope", 5)

    def test_invalid_time(self, income_engine):
        with pytest.raises(ValidationError):
            income_engine.value_at("TotalIncome", "5")

    def test_duplicate_name(self, income_engine):
        with pytest.raises(DuplicateIdentityError):
            income_engine.create_source("Salary", 1)


# =============================================================================
# CACHING
# =============================================================================

class TestCaching:
    """Formula is called at most once per (node, time)."""

    def test_repeat_hits_cache(self, income_engine, counting_sum):
        income_engine.value_at("TotalIncome", 5)
        income_engine.value_at("TotalIncome", 15)
        assert income_engine.value_at("TotalIncome", 5) == 1000

        assert counting_sum.calls == 2
        assert income_engine.cached_times("TotalIncome") == [5, 15]

    def test_evaluation_is_idempotent(self, income_engine):
        first = income_engine.value_at("TotalIncome", 15)
        second = income_engine.value_at("TotalIncome", 15)
        assert first == second == 1500

    def test_invalidate_recomputes_same_value(self, income_engine, counting_sum):
        income_engine.value_at("TotalIncome", 5)
        income_engine.invalidate("TotalIncome")

        assert income_engine.cached_times("TotalIncome") == []
        assert income_engine.value_at("TotalIncome", 5) == 1000
        assert counting_sum.calls == 2

    def test_invalidate_ignores_sources_and_unknown(self, income_engine):
        income_engine.invalidate("Salary")
        income_engine.invalidate("Ghost")
        assert income_engine.cached_times("Salary") == []

    def test_stale_until_invalidated(self, income_engine):
        assert income_engine.value_at("TotalIncome", 5) == 1000

        income_engine.create_source("Extra", 7)
        income_engine.add_dependency("TotalIncome", "Extra", 0)
        assert income_engine.value_at("TotalIncome", 5) == 1000

        income_engine.invalidate("TotalIncome")
        assert income_engine.value_at("TotalIncome", 5) == 1007

    def test_invalidate_dependents(self, income_engine):
        income_engine.create_computed("Tax", lambda income: income * 0.2)
        income_engine.add_dependency("Tax", "TotalIncome", 0)
        income_engine.value_at("Tax", 5)

        cleared = income_engine.invalidate_dependents("Salary")

        assert cleared == ["Tax", "TotalIncome"]
        assert income_engine.cached_times("Tax") == []
        assert income_engine.cached_times("TotalIncome") == []

    def test_invalidate_dependents_unknown(self, income_engine):
        with pytest.raises(UnknownNodeError):
            income_engine.invalidate_dependents("Ghost")

    def test_cached_times_unknown(self, income_engine):
        with pytest.raises(UnknownNodeError):
            income_engine.cached_times("Ghost")

    def test_none_result_is_cached(self):
        calls = []

        def record(*values):
            calls.append(values)
            return None

        engine = LazyGraphEngine()
        engine.create_computed("Nothing", record)

        assert engine.value_at("Nothing", 3) is None
        assert engine.value_at("Nothing", 3) is None
        assert len(calls) == 1
        assert engine.cached_times("Nothing") == [3]

    def test_zero_bound_means_never_evict(self):
        engine = LazyGraphEngine(cache_max_entries=0)
        engine.create_source("S", 1)
        engine.create_computed("C", add)
        engine.add_dependency("C", "S", 0)

        for t in range(50):
            engine.value_at("C", t)

        assert engine.cache_max_entries is None
        assert len(engine.cached_times("C")) == 50
        assert engine.graph.get_node("C").data.cache.policy == "never-evict"

    def test_negative_bound_rejected_at_construction(self):
        with pytest.raises(ValidationError, match="negative"):
            LazyGraphEngine(cache_max_entries=-1)

    def test_bounded_cache_evicts_oldest(self, counting_sum):
        engine = LazyGraphEngine(cache_max_entries=2)
        engine.create_source("S", 1)
        engine.create_computed("C", counting_sum)
        engine.add_dependency("C", "S", 0)

        for t in (1, 2, 3):
            engine.value_at("C", t)

        assert engine.cached_times("C") == [2, 3]
        engine.value_at("C", 1)
        assert counting_sum.calls == 4


# =============================================================================
# CYCLES
# =============================================================================

class TestCycles:
    """Active cycles raise instead of recursing forever."""

    def test_two_node_cycle(self):
        engine = LazyGraphEngine()
        engine.create_computed("A", add)
        engine.create_computed("B", add)
        engine.add_dependency("A", "B", 0)
        back = engine.add_dependency("B", "A", 0)

        with pytest.raises(CyclicDependencyError) as excinfo:
            engine.value_at("A", 1)
        assert excinfo.value.cycle == ["A", "B", "A"]
        assert excinfo.value.time == 1

        # Engine is still usable once the cycle is broken
        engine.deactivate_dependency(back.oid, 0)
        assert engine.value_at("A", 1) == 0

    def test_self_dependency(self):
        engine = LazyGraphEngine()
        engine.create_computed("A", add)
        engine.add_dependency("A", "A", 0)

        with pytest.raises(CyclicDependencyError, match="A -> A"):
            engine.value_at("A", 0)

    def test_inactive_cycle_is_fine(self):
        engine = LazyGraphEngine()
        engine.create_source("S", 2)
        engine.create_computed("A", add)
        engine.create_computed("B", add)
        engine.add_dependency("A", "B", 0)
        engine.add_dependency("B", "S", 0)
        engine.add_dependency("B", "A", 100)

        assert engine.value_at("A", 50) == 2
        with pytest.raises(CyclicDependencyError):
            engine.value_at("A", 150)

    def test_failed_evaluation_caches_nothing(self):
        engine = LazyGraphEngine()
        engine.create_computed("A", add)
        engine.add_dependency("A", "A", 0)

        with pytest.raises(CyclicDependencyError):
            engine.value_at("A", 0)
        assert engine.cached_times("A") == []


# =============================================================================
# CACHE OBJECT
# =============================================================================

class TestEvaluationCache:

    def test_never_evict_by_default(self):
        cache = EvaluationCache()
        for t in range(100):
            cache.put(t, float(t))
        assert len(cache) == 100
        assert cache.policy == "never-evict"

    def test_lru_touch_on_get(self):
        cache = EvaluationCache(max_entries=2)
        cache.put(1, 1.0)
        cache.put(2, 2.0)
        cache.get(1)
        cache.put(3, 3.0)

        assert cache.times() == [1, 3]
        assert 2 not in cache
        assert cache.policy == "lru(2)"

    def test_hit_and_miss_counters(self):
        cache = EvaluationCache()
        cache.get(1)
        cache.put(1, 5.0)
        assert cache.get(1) == 5.0
        assert cache.stats()['hits'] == 1
        assert cache.stats()['misses'] == 1

    def test_get_default_on_miss(self):
        cache = EvaluationCache()
        marker = object()
        cache.put(1, None)

        assert cache.get(2, marker) is marker
        assert cache.get(1, marker) is None

    @pytest.mark.parametrize("bad", [0, -1])
    def test_invalid_bound(self, bad):
        with pytest.raises(ValidationError):
            EvaluationCache(max_entries=bad)
