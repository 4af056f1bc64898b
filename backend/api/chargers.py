"""Charger API routes (X-API-Key required)."""
import time

from fastapi import APIRouter, Depends, Header, Query, Response, status
from fastapi.responses import JSONResponse

from api.deps import get_current_partner, get_status_service
from api.errors import to_http_exception
from schemas.chargers import ChargerInitialize, ChargerStatusResponse, RetryLaterResponse, StatusUpdate
from status_core.coordinator import ChargerStatusService
from status_core.errors import ChargerServiceError, OperationTimeoutError
from status_core.snapshots import PartnerIdentity
from utils import config

router = APIRouter(tags=["chargers"])


def _elapsed_ms(start: float) -> str:
    """X-Response-Time header value."""
    return f"{int((time.perf_counter() - start) * 1000)}ms"


def _is_load_test(x_load_test: str | None) -> bool:
    """X-Load-Test: true is honoured only when the bypass is enabled in config."""
    return config.LOAD_TEST_BYPASS_ENABLED and (x_load_test or "").strip().lower() == "true"


@router.post(
    "/chargers",
    response_model=ChargerStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def initialize_charger(
    body: ChargerInitialize,
    response: Response,
    partner: PartnerIdentity = Depends(get_current_partner),
    service: ChargerStatusService = Depends(get_status_service),
) -> ChargerStatusResponse:
    """Register a charger for the calling partner. 200 if it is already theirs, 409 if someone else's."""
    try:
        snapshot, created = await service.initialize_charger(body.charger_id, partner.partner_id)
    except ChargerServiceError as e:
        raise to_http_exception(e) from e
    if not created:
        response.status_code = status.HTTP_200_OK
    return ChargerStatusResponse.from_snapshot(snapshot)


@router.get(
    "/chargers/{charger_id}",
    response_model=ChargerStatusResponse,
    responses={status.HTTP_202_ACCEPTED: {"model": RetryLaterResponse}},
    dependencies=[Depends(get_current_partner)],
)
async def get_charger_status(
    charger_id: str,
    response: Response,
    service: ChargerStatusService = Depends(get_status_service),
):
    """Charger status, cache first. X-Cache reports HIT or MISS; a timed-out miss answers 202 (retry)."""
    start = time.perf_counter()
    try:
        lookup = await service.get_status(charger_id)
    except OperationTimeoutError as e:
        body = RetryLaterResponse(retry_after=e.retry_after_s)
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content=body.model_dump(),
            headers={
                "Retry-After": str(e.retry_after_s),
                "X-Cache": "MISS",
                "X-Response-Time": _elapsed_ms(start),
            },
        )
    except ChargerServiceError as e:
        raise to_http_exception(e) from e
    response.headers["X-Cache"] = "HIT" if lookup.cache_hit else "MISS"
    response.headers["X-Response-Time"] = _elapsed_ms(start)
    return ChargerStatusResponse.from_snapshot(lookup.snapshot)


@router.put("/chargers/{charger_id}/status", response_model=ChargerStatusResponse)
async def update_charger_status(
    charger_id: str,
    body: StatusUpdate,
    response: Response,
    x_load_test: str | None = Header(default=None, alias="X-Load-Test"),
    partner: PartnerIdentity = Depends(get_current_partner),
    service: ChargerStatusService = Depends(get_status_service),
) -> ChargerStatusResponse:
    """Update status and meter value. The cached status is dropped before this responds."""
    start = time.perf_counter()
    try:
        snapshot = await service.update_status(
            charger_id,
            body.status,
            body.meter_value,
            partner.partner_id,
            bypass_ownership_check=_is_load_test(x_load_test),
        )
    except ChargerServiceError as e:
        raise to_http_exception(e) from e
    response.headers["X-Response-Time"] = _elapsed_ms(start)
    return ChargerStatusResponse.from_snapshot(snapshot)


@router.get("/partners/{partner_id}/chargers", response_model=list[ChargerStatusResponse])
async def list_partner_chargers(
    partner_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1),
    partner: PartnerIdentity = Depends(get_current_partner),
    service: ChargerStatusService = Depends(get_status_service),
) -> list[ChargerStatusResponse]:
    """One page of the calling partner's chargers (limit capped at PARTNER_PAGE_MAX_LIMIT)."""
    try:
        snapshots = await service.list_partner_chargers(partner_id, partner.partner_id, page=page, limit=limit)
    except ChargerServiceError as e:
        raise to_http_exception(e) from e
    return [ChargerStatusResponse.from_snapshot(s) for s in snapshots]
