"""Key/value cache stores shared by the market data services."""

import threading
from typing import Any, Callable, Optional, Protocol

from stonks.core.timezone import now_millis
from stonks.domain.models import CacheEntry


class CacheStore(Protocol):
    """
    Interface for a timestamped key/value cache.

    ``get`` returns the entry regardless of age; TTL decisions belong to the
    caller, which lets a reader fall back to a stale entry on purpose.
    """

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the stored entry for key, fresh or stale."""
        ...

    def set(self, key: str, value: Any) -> CacheEntry:
        """Store value under key, stamped with the store clock."""
        ...

    def delete(self, key: str) -> None:
        """Remove a single key (no-op when absent)."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def entries(self) -> list[CacheEntry]:
        """Snapshot of all entries."""
        ...


class InMemoryCacheStore:
    """
    Process-local cache backed by a lock-guarded dict.

    Writes are last-writer-wins overwrites; nothing is ever swept.
    """

    def __init__(self, clock: Callable[[], float] = now_millis):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, timestamp=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entries(self) -> list[CacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
