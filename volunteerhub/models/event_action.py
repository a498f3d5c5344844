# File: volunteerhub/models/event_action.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
from volunteerhub.core.exceptions import ActionClosed, ActionFull, AlreadyAssigned
import enum


class ActionStatus(enum.Enum):
    OPEN = "open"
    FULL = "full"
    COMPLETED = "completed"


class EventAction(BaseModel):
    """A sub-task of an event with its own volunteer quota and credit bonus"""

    __tablename__ = "event_actions"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    required_volunteers = Column(Integer, nullable=False)
    credits = Column(Integer, nullable=False, default=0)
    status = Column(Enum(ActionStatus), nullable=False, default=ActionStatus.OPEN)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    event = relationship("Event", back_populates="actions")
    assignments = relationship(
        "ActionAssignment",
        back_populates="action",
        cascade="all, delete-orphan",
        order_by="ActionAssignment.assigned_at",
    )

    @property
    def current_volunteers(self) -> int:
        return len(self.assignments)

    @property
    def is_full(self) -> bool:
        return self.current_volunteers >= self.required_volunteers

    def is_assigned(self, volunteer_id: int) -> bool:
        return any(a.volunteer_id == volunteer_id for a in self.assignments)

    def assign(self, volunteer_id: int, volunteer_name: str):
        """Add a volunteer, flipping the action to full when the quota is reached"""
        if self.status == ActionStatus.COMPLETED:
            raise ActionClosed()
        if self.status == ActionStatus.FULL or self.is_full:
            self.status = ActionStatus.FULL
            raise ActionFull()
        if self.is_assigned(volunteer_id):
            raise AlreadyAssigned()

        assignment = ActionAssignment(
            volunteer_id=volunteer_id,
            volunteer_name=volunteer_name,
            assigned_at=utcnow(),
        )
        self.assignments.append(assignment)
        if self.is_full:
            self.status = ActionStatus.FULL
        return assignment

    def complete(self, now) -> None:
        self.status = ActionStatus.COMPLETED
        self.completed_at = now


class ActionAssignment(BaseModel):
    __tablename__ = "action_assignments"
    __table_args__ = (
        UniqueConstraint("action_id", "volunteer_id", name="uq_action_assignment_volunteer"),
    )

    action_id = Column(Integer, ForeignKey("event_actions.id", ondelete="CASCADE"), nullable=False, index=True)
    volunteer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    volunteer_name = Column(String(255), nullable=False)
    assigned_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    action = relationship("EventAction", back_populates="assignments")
