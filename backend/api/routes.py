"""API route handlers."""
from fastapi import APIRouter, Request

from schemas.health import CacheStatsResponse, HealthResponse
from status_core.ttl_cache import BoundedTTLCache

router = APIRouter()


def _cache_stats(cache: BoundedTTLCache) -> CacheStatsResponse:
    stats = cache.stats()
    return CacheStatsResponse(
        size=stats.size,
        max_size=stats.max_size,
        ttl_ms=stats.ttl_ms,
        hits=stats.hits,
        misses=stats.misses,
        evictions=stats.evictions,
        expirations=stats.expirations,
        hit_ratio=round(stats.hit_ratio, 4),
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check with in-process cache counters (runs on the event loop, like every cache access)."""
    return HealthResponse(
        caches={
            "charger_status": _cache_stats(request.app.state.status_cache),
            "partner_identity": _cache_stats(request.app.state.partner_cache),
        }
    )
