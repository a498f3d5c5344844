# File: volunteerhub/crud/chat.py
from typing import List, Optional
from sqlalchemy.orm import Session
from volunteerhub.crud.base import CRUDBase, commit
from volunteerhub.models.base import utcnow
from volunteerhub.models.chat import ChatMessage
from volunteerhub.schemas.chat import MessageCreate


class CRUDChatMessage(CRUDBase[ChatMessage, MessageCreate, MessageCreate]):

    def append_message(
        self,
        db: Session,
        *,
        event_id: int,
        sender_id: int,
        sender_name: str,
        content: str,
        sender_avatar: Optional[str] = None,
    ) -> ChatMessage:
        message = ChatMessage(
            event_id=event_id,
            sender_id=sender_id,
            sender_name=sender_name,
            sender_avatar=sender_avatar,
            content=content,
            timestamp=utcnow(),
        )
        db.add(message)
        commit(db)
        db.refresh(message)
        return message

    def list_messages(self, db: Session, *, event_id: int) -> List[ChatMessage]:
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.event_id == event_id)
            .order_by(ChatMessage.timestamp.asc(), ChatMessage.id.asc())
            .all()
        )


chat_message = CRUDChatMessage(ChatMessage)
