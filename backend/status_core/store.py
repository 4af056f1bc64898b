"""Backing store facade: async access to the charger and partner tables.

Every call runs the synchronous repository function in the threadpool with a
session of its own, and converts rows to frozen snapshots before the session
closes. A call abandoned by with_timeout therefore only ever touches its own
session. Not-found is raised distinctly; database failures become InternalError.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.charger import Charger as ChargerModel
from repositories.charger_repository import (
    create_charger as repo_create_charger,
    get_charger as repo_get_charger,
    list_chargers_by_partner as repo_list_chargers_by_partner,
    update_charger_status as repo_update_charger_status,
)
from repositories.partner_repository import (
    get_partner as repo_get_partner,
    get_partner_by_api_key as repo_get_partner_by_api_key,
)
from status_core.errors import (
    ChargerConflictError,
    ChargerNotFoundError,
    InternalError,
    PartnerNotFoundError,
)
from status_core.snapshots import ChargerSnapshot, ChargerStatus, PartnerIdentity

LOG = logging.getLogger(__name__)

T = TypeVar("T")
SessionFactory = Callable[[], Session]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def charger_to_snapshot(row: ChargerModel) -> ChargerSnapshot:
    """Build an immutable snapshot from a charger row (session must still be open)."""
    try:
        status = ChargerStatus(row.status)
    except ValueError:
        status = ChargerStatus.UNKNOWN
    return ChargerSnapshot(
        charger_id=row.id,
        partner_id=row.partner_id,
        status=status,
        meter_value=float(row.meter_value),
        last_update=_as_utc(row.last_update),
        partner_name=row.partner.name if row.partner is not None else None,
    )


def _find_charger(session: Session, charger_id: str) -> ChargerSnapshot:
    row = repo_get_charger(session, charger_id)
    if row is None:
        raise ChargerNotFoundError(charger_id)
    return charger_to_snapshot(row)


def _update_charger(session: Session, charger_id: str, status: ChargerStatus, meter_value: float) -> ChargerSnapshot:
    row = repo_update_charger_status(session, charger_id, status=status.value, meter_value=meter_value)
    if row is None:
        raise ChargerNotFoundError(charger_id)
    return charger_to_snapshot(row)


def _create_charger(session: Session, charger_id: str, partner_id: str) -> ChargerSnapshot:
    if repo_get_partner(session, partner_id) is None:
        raise PartnerNotFoundError(partner_id)
    try:
        row = repo_create_charger(
            session,
            charger_id=charger_id,
            partner_id=partner_id,
            status=ChargerStatus.AVAILABLE.value,
            meter_value=0.0,
        )
    except IntegrityError as e:
        session.rollback()
        raise ChargerConflictError(charger_id) from e
    return charger_to_snapshot(row)


def _list_chargers_by_partner(session: Session, partner_id: str, limit: int, offset: int) -> list[ChargerSnapshot]:
    rows = repo_list_chargers_by_partner(session, partner_id, limit=limit, offset=offset)
    return [charger_to_snapshot(row) for row in rows]


def _find_partner_by_api_key(session: Session, api_key: str) -> PartnerIdentity:
    partner = repo_get_partner_by_api_key(session, api_key)
    if partner is None:
        raise PartnerNotFoundError()
    return PartnerIdentity(partner_id=partner.id, name=partner.name)


class ChargerStore:
    """Async backing store used behind the caches."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def find_charger(self, charger_id: str) -> ChargerSnapshot:
        return await self._run(_find_charger, charger_id)

    async def update_charger(self, charger_id: str, status: ChargerStatus, meter_value: float) -> ChargerSnapshot:
        return await self._run(_update_charger, charger_id, status, meter_value)

    async def create_charger(self, charger_id: str, partner_id: str) -> ChargerSnapshot:
        return await self._run(_create_charger, charger_id, partner_id)

    async def list_chargers_by_partner(self, partner_id: str, limit: int, offset: int) -> list[ChargerSnapshot]:
        return await self._run(_list_chargers_by_partner, partner_id, limit, offset)

    async def find_partner_by_api_key(self, api_key: str) -> PartnerIdentity:
        return await self._run(_find_partner_by_api_key, api_key)

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        return await run_in_threadpool(self._in_session, fn, *args)

    def _in_session(self, fn: Callable[..., T], *args: Any) -> T:
        session = self._session_factory()
        try:
            return fn(session, *args)
        except SQLAlchemyError as e:
            session.rollback()
            LOG.exception("Backing store call %s failed", fn.__name__)
            raise InternalError("Backing store failure") from e
        finally:
            session.close()
