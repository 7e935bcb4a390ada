"""
Guidance API Routes

Credit education answers and business credit building guidance. The
business answer lists the foundation steps the caller's saved business
profile is still missing.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_user_id
from ..database import get_db
from ..services.guidance import answer_credit_question, business_credit_guidance
from ..services.profiles import ProfileStore


router = APIRouter(prefix="/guidance", tags=["guidance"])


@router.get("/education", response_model=dict)
async def credit_education(
    q: str = Query("", description="Credit question, e.g. how is my FICO score calculated"),
    user_id: str = Depends(get_current_user_id),
):
    return answer_credit_question(q)


@router.get("/business-credit", response_model=dict)
async def business_credit(
    q: str = Query("", description="Business credit question, e.g. which vendors report Net-30"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    profile = ProfileStore(db).get(user_id)
    business = profile.business if profile is not None else None
    return business_credit_guidance(q, business)
