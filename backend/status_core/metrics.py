"""Prometheus metrics for the in-process caches."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, generate_latest

CACHE_HITS_TOTAL = Counter(
    "cache_hits_total",
    "Cache lookups that returned a live entry",
    ["cache"],
)

CACHE_MISSES_TOTAL = Counter(
    "cache_misses_total",
    "Cache lookups that found no live entry (absent or expired)",
    ["cache"],
)

CACHE_EVICTIONS_TOTAL = Counter(
    "cache_evictions_total",
    "Entries dropped to make room for a new key at capacity",
    ["cache"],
)

CACHE_EXPIRATIONS_TOTAL = Counter(
    "cache_expirations_total",
    "Entries dropped because their TTL had elapsed",
    ["cache"],
)

CACHE_SIZE = Gauge(
    "cache_size",
    "Entries currently resident in the cache",
    ["cache"],
)

CACHE_HIT_RATIO = Gauge(
    "cache_hit_ratio",
    "Ratio of cache hits to total cache lookups",
    ["cache_type"],
)

__all__ = [
    "CACHE_HITS_TOTAL",
    "CACHE_MISSES_TOTAL",
    "CACHE_EVICTIONS_TOTAL",
    "CACHE_EXPIRATIONS_TOTAL",
    "CACHE_SIZE",
    "CACHE_HIT_RATIO",
    "CONTENT_TYPE_LATEST",
    "generate_latest",
]
