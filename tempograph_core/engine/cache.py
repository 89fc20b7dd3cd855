"""
Evaluation Cache

Per-node memo of computed values keyed by evaluation timestamp.

Eviction policy:
- max_entries=None: never evict. The cache grows with every distinct
  timestamp evaluated and only shrinks through clear().
- max_entries=N: least-recently-used entries are dropped once N is exceeded.

Invalidation is always the caller's job. A value cached for time T is stale
once the dependencies active at T, or their values, change.
"""

import logging
from collections import OrderedDict
from typing import Any, List, Optional

from tempograph_core.model.base import Timestamp, ValidationError

logger = logging.getLogger(__name__)


class EvaluationCache:
    """
    Timestamp -> value memo owned by one computed node.

    Example:
        cache = EvaluationCache()
        cache.put(5, 1000.0)
        cache.get(5)      # 1000.0
        5 in cache        # True
        cache.clear()
    """

    def __init__(self, max_entries: Optional[int] = None):
        if max_entries is not None and max_entries <= 0:
            raise ValidationError(f"max_entries must be positive or None, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[Timestamp, float]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def policy(self) -> str:
        """Human-readable eviction policy."""
        return "never-evict" if self.max_entries is None else f"lru({self.max_entries})"

    def __contains__(self, time: Timestamp) -> bool:
        return time in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, time: Timestamp, default: Any = None) -> Any:
        """Cached value for time, or default. Counts hits and misses."""
        if time not in self._entries:
            self.misses += 1
            return default
        self.hits += 1
        if self.max_entries is not None:
            self._entries.move_to_end(time)
        return self._entries[time]

    def put(self, time: Timestamp, value: float) -> None:
        """Store value under time, evicting the oldest entry if bounded."""
        self._entries[time] = value
        self._entries.move_to_end(time)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached value for t={evicted}")

    def times(self) -> List[Timestamp]:
        """Cached timestamps, least recently used first."""
        return list(self._entries.keys())

    def clear(self) -> None:
        """Drop every cached value."""
        self._entries.clear()

    def stats(self):
        return {
            'entries': len(self._entries),
            'hits': self.hits,
            'misses': self.misses,
            'policy': self.policy,
        }

    def __repr__(self) -> str:
        return f"EvaluationCache(entries={len(self._entries)}, policy={self.policy})"
