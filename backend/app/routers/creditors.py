"""
Creditor Address API Routes

Mailing addresses for creditors and collectors, cached per user.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..database import get_db
from ..models.ssot import CreditorAddress, EntityType
from ..services.disputes import CreditorAddressCache


router = APIRouter(prefix="/creditors", tags=["creditors"])


class CreditorAddressRequest(BaseModel):
    """Address to remember for a creditor or collector."""
    creditor_name: str = Field(..., min_length=1)
    entity_type: EntityType = Field(default=EntityType.CREDITOR)
    name: str = Field(..., description="Recipient name as printed on the letter")
    address_line1: str
    city: str
    state: str = Field(..., min_length=2, max_length=2)
    zip: str


@router.put("", response_model=dict)
async def save_creditor_address(
    request: CreditorAddressRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    address = CreditorAddress(**request.model_dump())
    CreditorAddressCache(db).save(user_id, address)
    return address.to_dict()


@router.get("/{creditor_name}", response_model=dict)
async def get_creditor_address(
    creditor_name: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    address = CreditorAddressCache(db).get(user_id, creditor_name)
    if address is None:
        raise HTTPException(status_code=404, detail=f"No address on file for {creditor_name}")
    return address.to_dict()
