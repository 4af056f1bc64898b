"""EV Charger Status API: FastAPI backend."""
import logging
import os
import subprocess
import sys
import time
import uuid

from fastapi import FastAPI, Request, Response

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("status_core").setLevel(logging.INFO)

from db import SessionLocal
from api.chargers import router as chargers_router
from api.partners import router as partners_router
from api.routes import router
from status_core.metrics import CONTENT_TYPE_LATEST, generate_latest
from status_core.partner_cache import PartnerIdentityCache
from status_core.status_cache import ChargerStatusCache
from status_core.store import ChargerStore
from utils import config

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV Charger Status API",
    description="Partner-facing charger status tracking with an in-process read cache",
    version="0.1.0",
)

app.include_router(router, prefix="/api")
app.include_router(partners_router, prefix="/api")
app.include_router(chargers_router, prefix="/api")

# Process-wide state, created once and resolved by route dependencies.
app.state.charger_store = ChargerStore(SessionLocal)
app.state.status_cache = ChargerStatusCache(
    ttl_ms=config.STATUS_CACHE_TTL_MS,
    max_size=config.STATUS_CACHE_MAX_SIZE,
)
app.state.partner_cache = PartnerIdentityCache(
    ttl_ms=config.PARTNER_CACHE_TTL_MS,
    max_size=config.PARTNER_CACHE_MAX_SIZE,
)
app.state.partner_cache_sweeper = None

SLOW_REQUEST_MS = 1000


@app.middleware("http")
async def request_id_and_access_log(request: Request, call_next):
    """Tag each request with X-Request-ID and log method, path, status and duration."""
    request_id = uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000
        LOG.exception("[%s] %s %s failed after %.0fms", request_id, request.method, request.url.path, duration_ms)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request_id
    status = response.status_code
    # Health checks are only logged when they fail or are slow.
    if not request.url.path.endswith("/health") or status >= 400 or duration_ms > SLOW_REQUEST_MS:
        level = logging.ERROR if status >= 400 else logging.INFO
        LOG.log(level, "[%s] %s %s %d - %.0fms", request_id, request.method, request.url.path, status, duration_ms)
    return response


@app.on_event("startup")
async def startup() -> None:
    """Run DB migrations and start the partner cache sweep."""
    if os.environ.get("TESTING") != "true":
        _run_migrations()
    app.state.partner_cache_sweeper = app.state.partner_cache.start_sweeper(
        config.PARTNER_CACHE_SWEEP_INTERVAL_S
    )
    LOG.info("EV Charger Status API started")


@app.on_event("shutdown")
async def shutdown() -> None:
    """Stop the partner cache sweep."""
    sweeper = app.state.partner_cache_sweeper
    if sweeper is None:
        return
    task, stop_event = sweeper
    stop_event.set()
    await task
    app.state.partner_cache_sweeper = None


def _run_migrations() -> None:
    """alembic upgrade head from the backend directory."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ev-charger-status-api", "docs": "/docs", "health": "/api/health", "metrics": "/metrics"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
