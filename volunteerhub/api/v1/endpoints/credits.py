# File: volunteerhub/api/v1/endpoints/credits.py
from typing import Any
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal, get_current_user
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.models.user import User
from volunteerhub.services.participation_service import ParticipationService

router = APIRouter()


class ClaimRequest(BaseModel):
    event_id: int


@router.get("/", response_model=schemas.credit.CreditSummary)
def read_credits(current_user: User = Depends(get_current_user)) -> Any:
    """The caller's credit total, level and history"""
    return schemas.credit.CreditSummary(
        total=current_user.credits_total,
        volunteer_level=current_user.volunteer_level,
        history=[schemas.credit.CreditHistoryEntry.model_validate(e) for e in current_user.credit_history],
    )


@router.post("/claim", response_model=schemas.credit.ClaimResult)
def claim_credits(
    claim_in: ClaimRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Claim the credits of a completed event"""
    entry, user = ParticipationService(db).claim_credits(claim_in.event_id, principal)
    return schemas.credit.ClaimResult(
        credits_earned=entry.credits_earned,
        total_credits=user.credits_total,
        entry=schemas.credit.CreditHistoryEntry.model_validate(entry),
    )
