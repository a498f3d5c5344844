# File: volunteerhub/api/v1/endpoints/event_status.py
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.services.participation_service import ParticipationService

router = APIRouter()


@router.post("/{event_id}/complete")
def complete_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Mark an event completed, unlocking credit claims"""
    event = ParticipationService(db).complete_event(event_id, principal)
    return {
        "success": True,
        "message": "Event completed successfully",
        "event": schemas.event.Event.model_validate(event),
    }


@router.post("/{event_id}/cancel")
def cancel_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    event = ParticipationService(db).cancel_event(event_id, principal)
    return {
        "success": True,
        "message": "Event cancelled",
        "event": schemas.event.Event.model_validate(event),
    }
