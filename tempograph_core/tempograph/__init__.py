"""
TempoGraph facade.
"""

from .tempograph import TempoGraph

__all__ = ['TempoGraph']
