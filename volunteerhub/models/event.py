# File: volunteerhub/models/event.py
from typing import Optional, Tuple
from sqlalchemy import Column, String, Text, Boolean, Float, ForeignKey, Integer, DateTime, Enum
from sqlalchemy.orm import relationship
from volunteerhub.models.base import BaseModel, utcnow
from volunteerhub.models.event_action import EventAction, ActionStatus
from volunteerhub.models.event_request import EventRequest, RequestStatus
from volunteerhub.core.exceptions import (
    ActionNotFound,
    AlreadyCompleted,
    DuplicateApplication,
    EventNotActive,
    EventNotCompleted,
    NotApproved,
    RequestAlreadyProcessed,
    RequestNotFound,
    SlotsExhausted,
    ValidationFailed,
)
import enum


class EventStatus(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventCategory(enum.Enum):
    ENVIRONMENTAL = "Environmental"
    EDUCATION = "Education"
    HEALTHCARE = "Healthcare"
    SOCIAL = "Social"
    CULTURAL = "Cultural"
    SPORTS = "Sports"
    TECH = "Tech"
    COMMUNITY_DEVELOPMENT = "Community Development"
    ANIMAL_WELFARE = "Animal Welfare"
    DISASTER_RELIEF = "Disaster Relief"
    OTHER = "Other"


DEFAULT_ACTION_TITLE = "Event Completion"

# max_participants is edited through set_capacity
EDITABLE_FIELDS = frozenset(
    ("title", "description", "date", "location", "latitude", "longitude", "category", "credits")
)


class Event(BaseModel):
    """
    Event aggregate.

    Actions and requests are owned children and are only changed through the
    methods below, each of which checks the lifecycle invariants and touches
    the event row so the optimistic version check covers child changes too.
    """

    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False)
    location = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    category = Column(Enum(EventCategory), nullable=False, default=EventCategory.OTHER)

    # Participation
    credits = Column(Integer, nullable=False, default=0)
    max_participants = Column(Integer, nullable=False, default=0)  # 0 = unlimited
    remaining_slots = Column(Integer, nullable=False, default=0)

    # Lifecycle
    status = Column(Enum(EventStatus), nullable=False, default=EventStatus.ACTIVE)
    completed_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    # Legacy whole-event flag, kept for reporting only
    credits_have_been_claimed = Column(Boolean, nullable=False, default=False)

    # Metadata
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    version_id = Column(Integer, nullable=False)

    # Relationships
    owner = relationship("User", foreign_keys=[created_by])
    actions = relationship(
        "EventAction",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventAction.position",
    )
    requests = relationship(
        "EventRequest",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventRequest.applied_at",
    )
    messages = relationship("ChatMessage", back_populates="event", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version_id}

    # ---------------------------
    # Lookups
    # ---------------------------
    @property
    def is_active(self) -> bool:
        return self.status == EventStatus.ACTIVE

    @property
    def has_capacity_limit(self) -> bool:
        return (self.max_participants or 0) > 0

    @property
    def approved_count(self) -> int:
        return sum(1 for r in self.requests if r.status == RequestStatus.APPROVED)

    def get_action(self, action_id: int) -> EventAction:
        for action in self.actions:
            if action.id == action_id:
                return action
        raise ActionNotFound()

    def get_request(self, request_id: int) -> EventRequest:
        for request in self.requests:
            if request.id == request_id:
                return request
        raise RequestNotFound()

    def find_request_for(self, volunteer_id: int) -> Optional[EventRequest]:
        for request in self.requests:
            if request.volunteer_id == volunteer_id:
                return request
        return None

    def touch(self) -> None:
        self.updated_at = utcnow()

    def ensure_active(self) -> None:
        if not self.is_active:
            raise EventNotActive(f"Event is {self.status.value}")

    # ---------------------------
    # Capacity
    # ---------------------------
    def set_capacity(self, max_participants: int) -> None:
        """Change maxParticipants, keeping already approved volunteers counted"""
        self.max_participants = max_participants
        if max_participants > 0:
            self.remaining_slots = max(0, max_participants - self.approved_count)
        else:
            self.remaining_slots = 0
        self.touch()

    def update_details(self, changes: dict) -> None:
        """Apply an owner edit; settlement terms are frozen once the event leaves active"""
        self.ensure_active()
        changes = dict(changes)
        max_participants = changes.pop("max_participants", None)
        for field, value in changes.items():
            if field not in EDITABLE_FIELDS:
                raise ValidationFailed(f"Field '{field}' cannot be edited")
            setattr(self, field, value)
        if max_participants is not None:
            self.set_capacity(max_participants)
        self.touch()

    # ---------------------------
    # Actions
    # ---------------------------
    def add_action(self, title: str, description: Optional[str], required_volunteers: int, credits: int) -> EventAction:
        self.ensure_active()
        action = EventAction(
            position=len(self.actions),
            title=title,
            description=description,
            required_volunteers=required_volunteers,
            credits=credits,
            status=ActionStatus.OPEN,
        )
        self.actions.append(action)
        self.touch()
        return action

    def assign_to_action(self, action_id: int, volunteer_id: int, volunteer_name: str):
        self.ensure_active()
        action = self.get_action(action_id)
        assignment = action.assign(volunteer_id, volunteer_name)
        self.touch()
        return action, assignment

    # ---------------------------
    # Requests
    # ---------------------------
    def submit_request(self, volunteer_id: int, volunteer_name: str, action_id: Optional[int] = None) -> EventRequest:
        self.ensure_active()

        existing = self.find_request_for(volunteer_id)
        if existing is not None:
            raise DuplicateApplication(existing_request=existing.summary())

        if action_id is not None:
            self.get_action(action_id)

        # Slots are only consumed on approval
        request = EventRequest(
            volunteer_id=volunteer_id,
            volunteer_name=volunteer_name,
            status=RequestStatus.PENDING,
            applied_at=utcnow(),
            action_id=action_id,
        )
        self.requests.append(request)
        self.touch()
        return request

    def respond_to_request(
        self,
        request_id: int,
        responder_id: int,
        decision: RequestStatus,
        action_id: Optional[int] = None,
    ) -> EventRequest:
        if decision not in (RequestStatus.APPROVED, RequestStatus.REJECTED):
            raise ValidationFailed("Decision must be 'approved' or 'rejected'")

        request = self.get_request(request_id)
        if not request.is_pending:
            raise RequestAlreadyProcessed(f"Request has already been {request.status.value}")

        if decision == RequestStatus.APPROVED:
            self.ensure_active()
            if self.has_capacity_limit and (self.remaining_slots or 0) <= 0:
                raise SlotsExhausted()

            target_action_id = action_id if action_id is not None else request.action_id
            if target_action_id is not None:
                action = self.get_action(target_action_id)
                if not action.is_assigned(request.volunteer_id):
                    action.assign(request.volunteer_id, request.volunteer_name)
                request.action_id = action.id

            if self.has_capacity_limit:
                self.remaining_slots = max(0, self.remaining_slots - 1)

        request.status = decision
        request.processed_at = utcnow()
        request.processed_by = responder_id
        self.touch()
        return request

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def complete(self) -> None:
        if self.status == EventStatus.COMPLETED:
            raise AlreadyCompleted()
        self.ensure_active()

        now = utcnow()
        self.status = EventStatus.COMPLETED
        self.completed_at = now
        for action in self.actions:
            action.complete(now)
        self.touch()

    def cancel(self) -> None:
        if self.status == EventStatus.COMPLETED:
            raise AlreadyCompleted("Completed events cannot be cancelled")
        self.ensure_active()

        self.status = EventStatus.CANCELLED
        self.cancelled_at = utcnow()
        self.touch()

    # ---------------------------
    # Settlement
    # ---------------------------
    def settlement_for(self, volunteer_id: int) -> Tuple[int, str]:
        """Credits owed to an approved volunteer and the title they are booked under"""
        if self.status != EventStatus.COMPLETED:
            raise EventNotCompleted()

        request = self.find_request_for(volunteer_id)
        if request is None or request.status != RequestStatus.APPROVED:
            raise NotApproved()

        award = self.credits or 0
        action_title = DEFAULT_ACTION_TITLE
        action = next((a for a in self.actions if a.id == request.action_id), None)
        if action is not None:
            award += action.credits or 0
            action_title = action.title
        return award, action_title
