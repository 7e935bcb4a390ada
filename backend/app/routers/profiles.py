"""
Profile API Routes

Save, read and merge the caller's CreditProfile, run the audit over it,
and return the plain-text credit context summary.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..database import get_db
from ..models.ssot import (
    AccountType, BusinessEntityType, CreditProfile, NegativeItemType, ScoreSource,
)
from ..services.audit import run_audit
from ..services.disputes import DisputeHistoryStore, DisputeLifecycleTracker
from ..services.profiles import ProfileStore, build_credit_context, NO_PROFILE_MESSAGE


router = APIRouter(prefix="/profiles", tags=["profiles"])

RUN_INTAKE_FIRST = "No credit profile on file. Run intake first to create one."


# =============================================================================
# REQUEST MODELS
# =============================================================================

class NegativeItemModel(BaseModel):
    type: NegativeItemType
    creditor_name: str
    account_number_last4: Optional[str] = Field(None, max_length=4)
    amount: Optional[float] = None
    date_reported: Optional[str] = None
    date_of_delinquency: Optional[str] = None
    status: Optional[str] = None
    bureau: Optional[str] = Field(None, description="equifax, experian, transunion or all")
    disputable: Optional[bool] = Field(None, description="Absent means disputable")
    dispute_reason: Optional[str] = None


class BusinessProfileModel(BaseModel):
    legal_name: str
    entity_type: Optional[BusinessEntityType] = None
    ein: Optional[str] = None
    duns_number: Optional[str] = None
    state_of_formation: Optional[str] = None
    formation_date: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    annual_revenue: Optional[float] = None
    monthly_revenue: Optional[float] = None
    paydex_score: Optional[int] = Field(None, ge=0, le=100)
    intelliscore: Optional[int] = None
    existing_trade_lines: Optional[int] = None
    bank_account_open: Optional[bool] = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile. Only fields that are sent replace stored values."""
    name: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    ssn_last4: Optional[str] = Field(None, max_length=4)
    dob: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    current_score: Optional[int] = Field(None, ge=300, le=850)
    score_source: Optional[ScoreSource] = None
    total_accounts: Optional[int] = Field(None, ge=0)
    oldest_account_age_months: Optional[int] = Field(None, ge=0)
    average_account_age_months: Optional[int] = Field(None, ge=0)
    total_credit_limit: Optional[float] = Field(None, ge=0)
    total_balance: Optional[float] = Field(None, ge=0)
    utilization_percent: Optional[float] = Field(None, ge=0)
    on_time_payment_percent: Optional[float] = Field(None, ge=0, le=100)
    negative_items: Optional[List[NegativeItemModel]] = None
    hard_inquiries_last_12mo: Optional[int] = Field(None, ge=0)
    account_types: Optional[List[AccountType]] = None
    business: Optional[BusinessProfileModel] = None
    monthly_income: Optional[float] = None
    monthly_expenses: Optional[float] = None
    available_for_deposits: Optional[float] = None
    credit_goals: Optional[List[str]] = None
    timeline_months: Optional[int] = None


class ProfileRequest(ProfileUpdateRequest):
    """Full profile. Identity and mailing fields are required."""
    name: str
    address_line1: str
    city: str
    state: str = Field(..., min_length=2, max_length=2)
    zip: str
    negative_items: List[NegativeItemModel] = Field(default_factory=list)
    account_types: List[AccountType] = Field(default_factory=list)
    credit_goals: List[str] = Field(default_factory=list)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.put("/me", response_model=dict)
async def save_profile(
    request: ProfileRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create or replace the caller's profile."""
    profile = CreditProfile.from_dict(request.model_dump(mode="json", exclude_none=True))
    ProfileStore(db).save(user_id, profile)
    return profile.to_dict()


@router.get("/me", response_model=dict)
async def get_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    profile = ProfileStore(db).get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=NO_PROFILE_MESSAGE)
    return profile.to_dict()


@router.patch("/me", response_model=dict)
async def update_profile(
    request: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Shallow merge. Lists and the business object are replaced wholesale.
    """
    updates = request.model_dump(mode="json", exclude_unset=True)
    profile = ProfileStore(db).merge(user_id, updates)
    if profile is None:
        raise HTTPException(status_code=404, detail=NO_PROFILE_MESSAGE)
    return profile.to_dict()


@router.get("/me/audit", response_model=dict)
async def audit_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Run the credit audit over the stored profile."""
    profile = ProfileStore(db).get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=RUN_INTAKE_FIRST)
    return run_audit(profile).to_dict()


@router.get("/me/context", response_model=dict)
async def credit_context(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Plain-text summary of profile, audit and open disputes."""
    profile = ProfileStore(db).get(user_id)
    if profile is None:
        return {"context": build_credit_context(None, None, [], [])}

    tracker = DisputeLifecycleTracker(DisputeHistoryStore(db))
    context = build_credit_context(
        profile,
        run_audit(profile),
        tracker.pending(user_id),
        tracker.overdue(user_id),
    )
    return {"context": context}
