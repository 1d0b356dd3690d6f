"""Cache entry model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value with the epoch-millisecond time it was stored.

    Entries are never swept; freshness is decided by the reader.
    """

    key: str
    value: Any
    timestamp: float

    def age(self, now: float) -> float:
        """Milliseconds since the entry was stored."""
        return now - self.timestamp

    def is_fresh(self, now: float, ttl_ms: float) -> bool:
        """True iff the entry is still inside its TTL window."""
        return self.age(now) < ttl_ms
