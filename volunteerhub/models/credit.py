# File: volunteerhub/models/credit.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow


class CreditHistoryEntry(BaseModel):
    __tablename__ = "credit_history"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_credit_history_user_event"),
    )

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Snapshot reference, the entry outlives a deleted event
    event_id = Column(Integer, nullable=False, index=True)
    event_title = Column(String(255), nullable=False)
    action_title = Column(String(255), nullable=False)
    credits_earned = Column(Integer, nullable=False)
    earned_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="credit_history")
