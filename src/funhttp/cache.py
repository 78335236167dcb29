"""
=============================================================================
RESPONSE CACHE
=============================================================================

A small time-bounded cache shared by every request. The weather route
uses it so that repeated lookups for the same city and unit system do not
hit the upstream API more than once every ten minutes.

=============================================================================
ENTRY LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   get_or_refresh("paris_metric", loader)                             │
    │        │                                                             │
    │        ├── entry exists and age < TTL ──► return entry.payload       │
    │        │                                  (no fetch)                 │
    │        │                                                             │
    │        └── missing or stale                                          │
    │               │                                                      │
    │               ├──► loader()         ← runs WITHOUT the lock held     │
    │               │                                                      │
    │               └──► store CacheEntry(payload, now)                    │
    │                     (replaces any previous entry wholesale)          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Entries are never evicted in the background. A stale entry just sits
there until the next read for its key replaces it.

=============================================================================
CONCURRENCY
=============================================================================

    - Reads and writes of the key → entry map happen under one lock.
    - CacheEntry is frozen, so a reader either sees the old entry or the
      new one, never half of each.
    - The loader (an outbound HTTP call that can take up to 20 seconds)
      runs outside the lock. Two concurrent misses for the same key may
      both fetch; whichever writes last wins, and both results are valid.

=============================================================================
INTERVIEW QUESTIONS ABOUT CACHING
=============================================================================

Q: "Why not hold the lock while fetching?"
A: "A slow upstream would then block every other request that touches
   the cache, including hits for unrelated keys. Allowing a duplicate
   fetch on a cold key is a much smaller cost."

Q: "Why check expiry on read instead of evicting with a timer?"
A: "The key space is tiny (city x unit system) and a timer thread adds
   shutdown complexity for no real benefit."

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import logging
import threading
import time


logger = logging.getLogger(__name__)

DEFAULT_TTL = 10 * 60  # seconds


@dataclass(frozen=True)
class CacheEntry:
    """An immutable payload plus the clock reading when it was stored."""

    payload: str
    created_at: float

    def age(self, now: float) -> float:
        return now - self.created_at


class ResponseCache:
    """
    Thread-safe key → payload cache with a fixed time-to-live.

    Args:
        ttl: Maximum age in seconds. An entry is fresh while
             now - created_at < ttl.
        clock: Returns the current time in seconds. Defaults to
               time.monotonic; tests pass a fake clock.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def is_fresh(self, entry: CacheEntry, now: Optional[float] = None) -> bool:
        if now is None:
            now = self._clock()
        return entry.age(now) < self.ttl

    def get(self, key: str) -> Optional[str]:
        """Return the payload for key if it is still fresh, else None."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is not None and self.is_fresh(entry):
            return entry.payload
        return None

    def put(self, key: str, payload: str) -> CacheEntry:
        """Store payload under key, replacing whatever was there."""
        entry = CacheEntry(payload=payload, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def get_or_refresh(self, key: str, loader: Callable[[], str]) -> str:
        """
        Return a fresh payload for key, calling loader() on a miss.

        If loader() raises, nothing is stored and the exception propagates
        to the caller.
        """
        payload = self.get(key)
        if payload is not None:
            logger.debug(f"Cache hit for {key}")
            return payload

        logger.debug(f"Cache miss for {key}, refreshing")
        payload = loader()
        self.put(key, payload)
        return payload

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def weather_cache_key(city: str, units: str) -> str:
    """Key for a weather lookup: lower-cased city, "_", units parameter."""
    return f"{city.lower()}_{units}"
