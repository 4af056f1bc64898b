"""Partner repository: create, get by id, get by API key, list."""
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.charger import Charger as ChargerModel  # noqa: F401 - resolve Partner.chargers
from models.partner import Partner


def create_partner(session: Session, name: str, api_key: str | None = None) -> Partner:
    """Create a partner with a freshly generated API key, commit, and return it."""
    partner = Partner(id=str(uuid.uuid4()), name=name, api_key=api_key or str(uuid.uuid4()))
    session.add(partner)
    session.commit()
    session.refresh(partner)
    return partner


def get_partner(session: Session, partner_id: str) -> Optional[Partner]:
    """Return a partner by id or None."""
    return session.get(Partner, partner_id)


def get_partner_by_api_key(session: Session, api_key: str) -> Optional[Partner]:
    """Return the partner holding api_key or None."""
    return session.execute(select(Partner).where(Partner.api_key == api_key)).scalar_one_or_none()


def list_partners(session: Session) -> list[Partner]:
    """Return all partners."""
    result = session.execute(select(Partner).order_by(Partner.name))
    return list(result.scalars().all())
