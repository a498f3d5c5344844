# File: volunteerhub/schemas/chat.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    content: str = Field(..., max_length=5000)


class ChatMessage(BaseModel):
    id: int
    event_id: int
    sender_id: int
    sender_name: str
    sender_avatar: Optional[str] = None
    content: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
