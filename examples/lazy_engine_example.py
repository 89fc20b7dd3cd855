"""
TempoGraph - Examples

This script demonstrates the core operators available in TempoGraph:
1. Temporal graph: nodes, interval edges, point/interval queries
2. Time-respecting paths
3. Snapshots and metrics
4. Lazy evaluation with per-timestamp caching

Prerequisites:
    pip install -e .
"""

import logging

from tempograph_core import TempoGraph, LazyGraphEngine, CyclicDependencyError
from tempograph_core.operators import temporal_metrics
from tempograph_core.utils.logging_config import setup_logging

# =============================================================================
# SETUP
# =============================================================================

setup_logging(log_file="logs/examples.log", level=logging.DEBUG)


# =============================================================================
# 1. TEMPORAL GRAPH
# =============================================================================
print("\n" + "="*60)
print("1. TEMPORAL GRAPH")
print("="*60)

tg = TempoGraph(identity_fn=lambda name: name)
for name in ("A", "B", "C"):
    tg.insert_node(name)

tg.add_edge("A", "B", activated_at=10, deactivated_at=20)
tg.add_edge("B", "C", activated_at=25)
print(f"✓ Created {tg}")

print(f"Active at 20: {[e.oid for e in tg.active_at(20)]}")
print(f"Active at 22: {[e.oid for e in tg.active_at(22)]}")
print(f"Overlapping [20, 30]: {[e.oid for e in tg.edges_overlapping(20, 30)]}")


# =============================================================================
# 2. TIME-RESPECTING PATHS
# =============================================================================
print("\n" + "="*60)
print("2. TIME-RESPECTING PATHS")
print("="*60)

print(f"A -> C: {tg.time_respecting_path('A', 'C')}")
print(f"Earliest arrivals from A: {tg.earliest_arrival_times('A')}")


# =============================================================================
# 3. SNAPSHOTS & METRICS
# =============================================================================
print("\n" + "="*60)
print("3. SNAPSHOTS & METRICS")
print("="*60)

snap = tg.snapshot((15, 30))
print(snap)
print(f"Density: {snap.density()}")
print(f"Alive ratio [0, 40]: {temporal_metrics.graph_alive_ratio(tg, 0, 40)}")
print(f"Empty window rate: {temporal_metrics.interaction_velocity(tg, 40, 0)}")


# =============================================================================
# 4. LAZY EVALUATION
# =============================================================================
print("\n" + "="*60)
print("4. LAZY EVALUATION")
print("="*60)

engine = LazyGraphEngine()
engine.create_source("Salary", 1000)
engine.create_source("Bonus", 500)
engine.create_computed("TotalIncome", lambda *values: sum(values))

# TotalIncome depends on Salary from t=0, on Bonus only from t=11
engine.add_dependency("TotalIncome", "Salary", 0)
engine.add_dependency("TotalIncome", "Bonus", 11)

print(f"t=5:  {engine.value_at('TotalIncome', 5)}")
print(f"t=15: {engine.value_at('TotalIncome', 15)}")
print(f"t=5 again (cached): {engine.value_at('TotalIncome', 5)}")

engine.create_computed("Loop", lambda *values: sum(values))
engine.add_dependency("Loop", "TotalIncome", 0)
engine.add_dependency("TotalIncome", "Loop", 100)
try:
    engine.value_at("TotalIncome", 150)
except CyclicDependencyError as e:
    print(f"✓ Cycle detected: {e.cycle}")

print("\nAll examples completed successfully!")
