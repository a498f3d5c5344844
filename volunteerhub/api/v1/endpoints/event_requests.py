# File: volunteerhub/api/v1/endpoints/event_requests.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.models.event_request import RequestStatus
from volunteerhub.services.participation_service import ParticipationService

router = APIRouter()


@router.post("/{event_id}/requests", status_code=status.HTTP_201_CREATED)
def submit_request(
    event_id: int,
    request_in: Optional[schemas.event.RequestCreate] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Apply to an event as the calling volunteer"""
    action_id = request_in.action_id if request_in else None
    request = ParticipationService(db).submit_request(event_id, principal, action_id)
    return {
        "success": True,
        "message": "Application submitted successfully",
        "request": schemas.event.EventRequest.model_validate(request),
    }


@router.get("/{event_id}/requests", response_model=List[schemas.event.EventRequest])
def list_requests(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Applications for an event, owner or admin only"""
    return ParticipationService(db).list_requests(event_id, principal)


@router.patch("/{event_id}/requests/{request_id}")
def respond_to_request(
    event_id: int,
    request_id: int,
    decision_in: schemas.event.RequestDecision,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Approve or reject a pending application"""
    decision = RequestStatus(decision_in.status)
    service = ParticipationService(db)
    request = service.respond_to_request(event_id, request_id, principal, decision, decision_in.action_id)
    return {
        "success": True,
        "message": f"Request {decision.value} successfully",
        "request": schemas.event.EventRequest.model_validate(request),
        "remaining_slots": request.event.remaining_slots,
    }
