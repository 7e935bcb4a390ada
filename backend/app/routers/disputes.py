"""
Dispute API Routes

Submit dispute letters (structured or free text), list the caller's
disputes with their deadline partition, and move disputes through
their status lifecycle.
"""
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..database import get_db
from ..models.catalog import LetterType
from ..models.ssot import Bureau, DisputeOutcome, DisputeStatus, LetterAddress
from ..services.disputes import DisputeHistoryStore, DisputeLifecycleTracker
from ..services.disputes.submission import DisputeSubmissionService
from ..services.mail import LobMailService, get_mail_service


router = APIRouter(prefix="/disputes", tags=["disputes"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class AddressModel(BaseModel):
    name: str
    address_line1: str
    city: str
    state: str = Field(..., min_length=2, max_length=2)
    zip: str


class SubmitDisputeRequest(BaseModel):
    """Request to mail a dispute letter."""
    letter_type: LetterType = Field(..., description="Letter type id, e.g. 609_verification")
    bureau: Optional[Bureau] = Field(None, description="Bureau recipient")
    creditor_name: Optional[str] = Field(None, description="Creditor or collector recipient (cached address)")
    address: Optional[AddressModel] = Field(None, description="Explicit recipient address")
    send_all: bool = Field(default=False, description="Mail to all three bureaus")
    note: Optional[str] = Field(None, description="Extra paragraph added to the letter")
    extra: Optional[Dict[str, str]] = Field(
        None, description="Letter inputs such as reason, offer_percent, debt_state or demand_amount",
    )


class InterpretRequest(BaseModel):
    """Free-text dispute request."""
    text: str = Field(..., min_length=1)


class StatusUpdateRequest(BaseModel):
    """Request to move a dispute to a new status."""
    status: DisputeStatus
    outcome: Optional[DisputeOutcome] = Field(None, description="Defaults to pending when resolving")
    note: Optional[str] = None


def _raise_for_error(result: dict) -> dict:
    if "error" in result:
        raise HTTPException(status_code=result.get("status_code", 404), detail=result["error"])
    return result


def _tracker(db: Session) -> DisputeLifecycleTracker:
    return DisputeLifecycleTracker(DisputeHistoryStore(db))


# =============================================================================
# SUBMISSION
# =============================================================================

@router.post("", response_model=dict)
def submit_dispute(
    request: SubmitDisputeRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    mail: Optional[LobMailService] = Depends(get_mail_service),
):
    """
    Mail a dispute letter. Sync so the blocking Lob call runs in the threadpool.

    Target precedence: explicit address, then bureau, then creditor name.
    With no target, bureau letters go to Equifax and other letters ask
    for a recipient.
    """
    target = None
    if request.address is not None:
        target = LetterAddress(**request.address.model_dump())
    elif request.bureau is not None:
        target = request.bureau
    elif request.creditor_name:
        target = request.creditor_name

    extra = dict(request.extra or {})
    if request.note:
        extra["note"] = request.note
    service = DisputeSubmissionService(db, mail)
    result = service.submit(
        user_id,
        request.letter_type,
        target,
        send_all=request.send_all,
        extra=extra or None,
    )
    return _raise_for_error(result)


@router.post("/interpret", response_model=dict)
def interpret_dispute(
    request: InterpretRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    mail: Optional[LobMailService] = Depends(get_mail_service),
):
    """Free-text request, e.g. "send a 609 letter to all three bureaus"."""
    service = DisputeSubmissionService(db, mail)
    return _raise_for_error(service.interpret(user_id, request.text))


# =============================================================================
# TRACKING
# =============================================================================

@router.get("", response_model=dict)
async def list_disputes(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Counts plus pending, overdue and resolved disputes."""
    return _tracker(db).summary(user_id)


@router.get("/pending", response_model=list)
async def pending_disputes(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return [r.to_dict() for r in _tracker(db).pending(user_id)]


@router.get("/overdue", response_model=list)
async def overdue_disputes(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Open disputes whose 30-day response deadline has passed."""
    return [r.to_dict() for r in _tracker(db).overdue(user_id)]


@router.post("/{dispute_id}/status", response_model=dict)
async def update_dispute_status(
    dispute_id: str,
    request: StatusUpdateRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    result = _tracker(db).transition(
        user_id,
        dispute_id,
        request.status,
        outcome=request.outcome,
        note=request.note,
    )
    return _raise_for_error(result)
