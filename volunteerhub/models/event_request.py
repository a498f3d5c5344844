# File: volunteerhub/models/event_request.py
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
import enum


class RequestStatus(enum.Enum):
    PENDING = "pending"    # Volunteer applied
    APPROVED = "approved"  # Accepted by the event owner
    REJECTED = "rejected"  # Declined by the event owner


class EventRequest(BaseModel):
    """A volunteer's application to an event, one per volunteer per event"""

    __tablename__ = "event_requests"
    __table_args__ = (
        UniqueConstraint("event_id", "volunteer_id", name="uq_event_request_volunteer"),
    )

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    volunteer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    volunteer_name = Column(String(255), nullable=False)
    status = Column(Enum(RequestStatus), nullable=False, default=RequestStatus.PENDING)
    applied_at = Column(DateTime, nullable=False, default=utcnow)
    action_id = Column(Integer, ForeignKey("event_actions.id", ondelete="SET NULL"), nullable=True)
    processed_at = Column(DateTime, nullable=True)
    processed_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    event = relationship("Event", back_populates="requests")
    action = relationship("EventAction")

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def summary(self) -> dict:
        return {
            "id": self.id,
            "volunteer_id": self.volunteer_id,
            "volunteer_name": self.volunteer_name,
            "status": self.status.value,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
            "action_id": self.action_id,
        }
