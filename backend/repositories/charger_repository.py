"""Charger repository: get, create, update status, list by partner."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from models.charger import Charger as ChargerModel
from models.partner import Partner as PartnerModel  # noqa: F401 - resolve Charger.partner


def create_charger(
    session: Session,
    *,
    charger_id: str,
    partner_id: str,
    status: str = "AVAILABLE",
    meter_value: float = 0.0,
) -> ChargerModel:
    """Create a charger owned by partner_id, commit, and return it."""
    charger = ChargerModel(
        id=charger_id,
        partner_id=partner_id,
        status=status,
        meter_value=meter_value,
        last_update=datetime.now(timezone.utc),
    )
    session.add(charger)
    session.commit()
    session.refresh(charger)
    return charger


def get_charger(session: Session, charger_id: str) -> Optional[ChargerModel]:
    """Return charger by id with its partner, or None."""
    return session.execute(
        select(ChargerModel).options(joinedload(ChargerModel.partner)).where(ChargerModel.id == charger_id)
    ).scalar_one_or_none()


def update_charger_status(
    session: Session,
    charger_id: str,
    *,
    status: str,
    meter_value: float,
) -> Optional[ChargerModel]:
    """Set status and meter_value and stamp last_update. Returns updated charger or None if not found."""
    charger = get_charger(session, charger_id)
    if charger is None:
        return None
    charger.status = status
    charger.meter_value = meter_value
    charger.last_update = datetime.now(timezone.utc)
    session.commit()
    session.refresh(charger)
    return charger


def list_chargers_by_partner(
    session: Session,
    partner_id: str,
    *,
    limit: int = 50,
    offset: int = 0,
) -> list[ChargerModel]:
    """Return one page of a partner's chargers, ordered by id."""
    result = session.execute(
        select(ChargerModel)
        .options(joinedload(ChargerModel.partner))
        .where(ChargerModel.partner_id == partner_id)
        .order_by(ChargerModel.id)
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())
