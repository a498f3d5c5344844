# File: volunteerhub/models/chat.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow


class ChatMessage(BaseModel):
    __tablename__ = "chat_messages"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    sender_name = Column(String(255), nullable=False)
    sender_avatar = Column(String(500), nullable=True)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    event = relationship("Event", back_populates="messages")
