# File: volunteerhub/schemas/event.py
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from volunteerhub.models.event import EventCategory, EventStatus
from volunteerhub.models.event_action import ActionStatus
from volunteerhub.models.event_request import RequestStatus


class ActionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    required_volunteers: int = Field(..., gt=0)
    credits: int = Field(0, ge=0)


class ActionAssignment(BaseModel):
    volunteer_id: int
    volunteer_name: str
    assigned_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventAction(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    required_volunteers: int
    credits: int
    current_volunteers: int
    status: ActionStatus
    completed_at: Optional[datetime] = None
    assignments: List[ActionAssignment] = []

    model_config = ConfigDict(from_attributes=True)


class EventRequest(BaseModel):
    id: int
    event_id: int
    volunteer_id: int
    volunteer_name: str
    status: RequestStatus
    applied_at: datetime
    action_id: Optional[int] = None
    processed_at: Optional[datetime] = None
    processed_by: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class RequestCreate(BaseModel):
    action_id: Optional[int] = None


class RequestDecision(BaseModel):
    status: Literal["approved", "rejected"]
    action_id: Optional[int] = None


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    category: EventCategory = EventCategory.OTHER
    credits: int = Field(0, ge=0)
    max_participants: int = Field(0, ge=0)


class EventCreate(EventBase):
    actions: List[ActionCreate] = []


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    category: Optional[EventCategory] = None
    credits: Optional[int] = Field(None, ge=0)
    max_participants: Optional[int] = Field(None, ge=0)


class Event(EventBase):
    id: int
    remaining_slots: int
    status: EventStatus
    completed_at: Optional[datetime] = None
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    actions: List[EventAction] = []
    requests: List[EventRequest] = []

    model_config = ConfigDict(from_attributes=True)


class EventSearchResult(BaseModel):
    id: int
    title: str
    description: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    category: EventCategory
    date: datetime
    credits: int
    distance_km: Optional[float] = None
