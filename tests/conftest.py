"""
Shared fixtures for the TempoGraph test suite.
"""

import pytest

from tempograph_core import TempoGraph, LazyGraphEngine


@pytest.fixture
def graph():
    """Empty graph whose node data is its own identity."""
    return TempoGraph(identity_fn=lambda name: name)


@pytest.fixture
def abc_graph(graph):
    """A, B, C with A->B over [1, 5] and B->C over [6, 10]."""
    for name in ("A", "B", "C"):
        graph.insert_node(name)
    graph.add_edge("A", "B", 1, deactivated_at=5)
    graph.add_edge("B", "C", 6, deactivated_at=10)
    return graph


class CountingSum:
    """Summing formula that records how many times it was called."""

    def __init__(self):
        self.calls = 0

    def __call__(self, *values):
        self.calls += 1
        return sum(values)


@pytest.fixture
def counting_sum():
    return CountingSum()


@pytest.fixture
def income_engine(counting_sum):
    """Salary=1000 from t=0, Bonus=500 from t=11, TotalIncome = sum."""
    engine = LazyGraphEngine(cache_max_entries=None)
    engine.create_source("Salary", 1000)
    engine.create_source("Bonus", 500)
    engine.create_computed("TotalIncome", counting_sum)
    engine.add_dependency("TotalIncome", "Salary", 0)
    engine.add_dependency("TotalIncome", "Bonus", 11)
    return engine
