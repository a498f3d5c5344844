# File: volunteerhub/api/v1/endpoints/chat.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.services.chat_service import ChatService

router = APIRouter()


@router.get("/{event_id}/messages", response_model=List[schemas.chat.ChatMessage])
def list_messages(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """All messages of an event chat, oldest first; clients poll this"""
    return ChatService(db).list_messages(event_id)


@router.post("/{event_id}/messages", response_model=schemas.chat.ChatMessage, status_code=status.HTTP_201_CREATED)
def post_message(
    event_id: int,
    message_in: schemas.chat.MessageCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    return ChatService(db).append_message(event_id, principal, message_in.content)
