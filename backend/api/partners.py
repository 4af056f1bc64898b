"""Partner API routes (unauthenticated administration)."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from db import get_db
from repositories.partner_repository import create_partner as repo_create_partner
from repositories.partner_repository import get_partner as repo_get_partner
from repositories.partner_repository import list_partners as repo_list_partners
from schemas.partners import PartnerCreate, PartnerCreated, PartnerResponse

router = APIRouter(prefix="/partners", tags=["partners"])


@router.post("", response_model=PartnerCreated, status_code=status.HTTP_201_CREATED)
def create_partner(body: PartnerCreate, db: Session = Depends(get_db)) -> PartnerCreated:
    """Create a partner and return it with its newly issued API key."""
    partner = repo_create_partner(db, name=body.name)
    return PartnerCreated(id=partner.id, name=partner.name, api_key=partner.api_key)


@router.get("", response_model=list[PartnerResponse])
def list_partners(db: Session = Depends(get_db)) -> list[PartnerResponse]:
    """List all partners."""
    return [PartnerResponse(id=p.id, name=p.name) for p in repo_list_partners(db)]


@router.get("/{partner_id}", response_model=PartnerResponse)
def get_partner(partner_id: str, db: Session = Depends(get_db)) -> PartnerResponse:
    """Partner by id."""
    partner = repo_get_partner(db, partner_id)
    if partner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Partner not found")
    return PartnerResponse(id=partner.id, name=partner.name)
