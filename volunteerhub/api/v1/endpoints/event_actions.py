# File: volunteerhub/api/v1/endpoints/event_actions.py
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.services.participation_service import ParticipationService

router = APIRouter()


@router.post("/{event_id}/actions", response_model=schemas.event.EventAction, status_code=status.HTTP_201_CREATED)
def add_action(
    event_id: int,
    action_in: schemas.event.ActionCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    return ParticipationService(db).add_action(event_id, principal, action_in)


@router.post("/{event_id}/actions/{action_id}/apply")
def apply_to_action(
    event_id: int,
    action_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Join an open action directly"""
    action, _ = ParticipationService(db).apply_to_action(event_id, action_id, principal)
    return {
        "success": True,
        "message": "Successfully applied to the action",
        "action": schemas.event.EventAction.model_validate(action),
    }
