"""
TempoGraph lazy evaluation engine.
"""

from .cache import EvaluationCache
from .lazy_engine import LazyGraphEngine

__all__ = [
    'EvaluationCache',
    'LazyGraphEngine',
]
