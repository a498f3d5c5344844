# File: volunteerhub/services/chat_service.py
from typing import List
from sqlalchemy.orm import Session
from volunteerhub import crud
from volunteerhub.core.exceptions import ValidationFailed
from volunteerhub.core.principal import Principal
from volunteerhub.models.chat import ChatMessage
import logging

logger = logging.getLogger(__name__)


class ChatService:
    """Per-event message log, polled by clients"""

    def __init__(self, db: Session):
        self.db = db

    def append_message(self, event_id: int, principal: Principal, content: str) -> ChatMessage:
        crud.event.get_or_raise(self.db, event_id)
        content = (content or "").strip()
        if not content:
            raise ValidationFailed("Message content is required")

        sender = crud.user.get_or_raise(self.db, principal.user_id)
        message = crud.chat_message.append_message(
            self.db,
            event_id=event_id,
            sender_id=sender.id,
            sender_name=sender.full_name,
            sender_avatar=sender.avatar_url,
            content=content,
        )
        logger.debug(f"Message {message.id} posted to event {event_id} by user {sender.id}")
        return message

    def list_messages(self, event_id: int) -> List[ChatMessage]:
        crud.event.get_or_raise(self.db, event_id)
        return crud.chat_message.list_messages(self.db, event_id=event_id)
