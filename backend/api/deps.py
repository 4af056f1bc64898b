"""FastAPI dependencies: shared caches and store from app.state, API key authentication."""
from fastapi import Depends, Header, Request

from api.errors import to_http_exception
from status_core.coordinator import Authenticator, ChargerStatusService, StoreTimeouts
from status_core.errors import ChargerServiceError
from status_core.snapshots import PartnerIdentity
from status_core.store import ChargerStore
from utils import config


def get_charger_store(request: Request) -> ChargerStore:
    """Backing store created at startup (overridden in tests)."""
    return request.app.state.charger_store


def get_status_service(
    request: Request,
    store: ChargerStore = Depends(get_charger_store),
) -> ChargerStatusService:
    """Status service bound to the process-wide status cache."""
    return ChargerStatusService(store, request.app.state.status_cache, StoreTimeouts.from_config())


async def get_current_partner(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    store: ChargerStore = Depends(get_charger_store),
) -> PartnerIdentity:
    """Resolve X-API-Key to a partner or fail with 401 (503 if the lookup times out)."""
    authenticator = Authenticator(store, request.app.state.partner_cache, config.AUTH_LOOKUP_TIMEOUT_MS)
    try:
        return await authenticator.authenticate(x_api_key)
    except ChargerServiceError as e:
        raise to_http_exception(e) from e
