# =============================================================================
# FOREX JOURNAL FEEDS - CACHE STORE
# =============================================================================
#
# Keyed, TTL-bound, in-memory store for fetch results.
#
# - get() returns entries regardless of freshness; the caller decides policy
# - put() overwrites by key (last write wins), never fails
# - No eviction beyond overwrite-by-key, no persistence
# - NOT thread-safe on its own; AcquisitionClient owns the lock
#
# =============================================================================

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


@dataclass(frozen=True)
class CacheEntry:
    """A cached fetch result. Times are epoch seconds."""
    key: str
    payload: Any
    stored_at: float
    expires_at: float

    @property
    def ttl_seconds(self) -> float:
        return self.expires_at - self.stored_at


class CacheStore:
    """In-memory TTL cache keyed by logical request key."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: Returns the current time in epoch seconds (default time.time)
        """
        self._clock = clock or time.time
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key if present (fresh or stale), else None."""
        return self._entries.get(key)

    def put(self, key: str, payload: Any, ttl_ms: int) -> CacheEntry:
        """
        Create or overwrite the entry for key.

        Args:
            key: Logical request key
            payload: Opaque value, not interpreted by the cache
            ttl_ms: Lifetime in milliseconds (negative values count as 0)

        Returns:
            The stored entry
        """
        now = self._clock()
        ttl_seconds = max(0, ttl_ms) / 1000.0
        entry = CacheEntry(
            key=key,
            payload=payload,
            stored_at=now,
            expires_at=now + ttl_seconds,
        )
        self._entries[key] = entry
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() < entry.expires_at

    def clear(self) -> None:
        """Remove all entries. Only called on explicit request."""
        self._entries.clear()

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
