"""Bounded in-memory TTL cache with lazy expiry and insertion-order eviction.

Entries are stamped with the clock when set and expire once their age
reaches the TTL. Expiry is only observed on get (or purge_expired); there is
no background work here. When a new key would exceed max_size, the entry
that was inserted first is evicted, regardless of how often it is read.

Not thread-safe: every caller runs on the event loop thread.
"""
from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

from status_core.metrics import (
    CACHE_EVICTIONS_TOTAL,
    CACHE_EXPIRATIONS_TOTAL,
    CACHE_HIT_RATIO,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
    CACHE_SIZE,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    value: V
    inserted_at: float  # clock() seconds


@dataclass(frozen=True)
class CacheStats:
    """Counters for one cache instance (health endpoint). Prometheus series are per cache name."""

    size: int
    max_size: int
    ttl_ms: int
    hits: int
    misses: int
    evictions: int
    expirations: int

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class BoundedTTLCache(Generic[K, V]):
    """
    Key -> value store holding at most max_size entries, each valid for ttl_ms.

    Every hit, miss, eviction and expiration is also exported to Prometheus
    under the `cache` label `name`; instances sharing a name share the series.
    """

    def __init__(
        self,
        ttl_ms: int,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        self._name = name
        self._ttl_s = max(0, int(ttl_ms)) / 1000.0
        self._ttl_ms = max(0, int(ttl_ms))
        self._max_size = int(max_size)
        self._clock = clock
        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0
        self._m_hits = CACHE_HITS_TOTAL.labels(cache=name)
        self._m_misses = CACHE_MISSES_TOTAL.labels(cache=name)
        self._m_evictions = CACHE_EVICTIONS_TOTAL.labels(cache=name)
        self._m_expirations = CACHE_EXPIRATIONS_TOTAL.labels(cache=name)
        self._m_size = CACHE_SIZE.labels(cache=name)
        self._m_hit_ratio = CACHE_HIT_RATIO.labels(cache_type=name)
        self._m_size.set(0)

    @property
    def name(self) -> str:
        return self._name

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: K) -> Optional[V]:
        """Return the live value for key, or None. Drops the entry if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._record_lookup(hit=False)
            return None
        if self._is_expired(entry, self._clock()):
            del self._entries[key]
            self._expirations += 1
            self._m_expirations.inc()
            self._m_size.set(len(self._entries))
            self._record_lookup(hit=False)
            return None
        self._record_lookup(hit=True)
        return entry.value

    def set(self, key: K, value: V) -> None:
        """Insert or replace key. A new key at capacity evicts the oldest inserted entry."""
        if self._max_size <= 0:
            return
        if key not in self._entries and len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
            self._evictions += 1
            self._m_evictions.inc()
        # Replacing keeps the key's insertion position.
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())
        self._m_size.set(len(self._entries))

    def invalidate(self, key: K) -> None:
        """Remove key if present."""
        if key in self._entries:
            del self._entries[key]
            self._m_size.set(len(self._entries))

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        expired = [k for k, entry in self._entries.items() if self._is_expired(entry, now)]
        for k in expired:
            del self._entries[k]
        if expired:
            self._expirations += len(expired)
            self._m_expirations.inc(len(expired))
            self._m_size.set(len(self._entries))
        return len(expired)

    def clear(self) -> None:
        """Drop all entries (counters are kept)."""
        self._entries.clear()
        self._m_size.set(0)

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._entries),
            max_size=self._max_size,
            ttl_ms=self._ttl_ms,
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            expirations=self._expirations,
        )

    def _record_lookup(self, hit: bool) -> None:
        if hit:
            self._hits += 1
            self._m_hits.inc()
        else:
            self._misses += 1
            self._m_misses.inc()
        self._m_hit_ratio.set(self._hits / (self._hits + self._misses))

    def _is_expired(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.inserted_at >= self._ttl_s

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Residency only; does not check expiry or touch counters.
        return key in self._entries
