"""Health check response schema."""
from pydantic import BaseModel


class CacheStatsResponse(BaseModel):
    """Counters for one in-process cache."""

    size: int
    max_size: int
    ttl_ms: int
    hits: int
    misses: int
    evictions: int
    expirations: int
    hit_ratio: float


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = "ok"
    service: str = "ev-charger-status-api"
    caches: dict[str, CacheStatsResponse] = {}
