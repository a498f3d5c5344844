# File: volunteerhub/crud/event.py
from datetime import datetime
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from volunteerhub.crud.base import CRUDBase
from volunteerhub.models.event import Event, EventCategory, EventStatus
from volunteerhub.models.event_request import EventRequest, RequestStatus
from volunteerhub.models.user import UserRole
from volunteerhub.core.exceptions import EventNotFound
from volunteerhub.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_or_raise(self, db: Session, id: int) -> Event:
        event = self.get(db, id)
        if event is None:
            raise EventNotFound()
        return event

    def get_by_owner(self, db: Session, *, owner_id: int) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.created_by == owner_id)
            .order_by(Event.date.asc())
            .all()
        )

    def get_visible_to(self, db: Session, *, user_id: int, role: UserRole) -> List[Event]:
        """Companies see their own events, volunteers everything not cancelled, admins all"""
        query = db.query(Event)
        if role == UserRole.COMPANY:
            query = query.filter(Event.created_by == user_id)
        elif role == UserRole.VOLUNTEER:
            query = query.filter(Event.status != EventStatus.CANCELLED)
        return query.order_by(Event.created_at.desc(), Event.id.desc()).all()

    def get_approved_for_volunteer(self, db: Session, *, volunteer_id: int) -> List[Event]:
        return (
            db.query(Event)
            .join(EventRequest, EventRequest.event_id == Event.id)
            .filter(
                EventRequest.volunteer_id == volunteer_id,
                EventRequest.status == RequestStatus.APPROVED,
            )
            .order_by(Event.date.asc())
            .all()
        )

    def search(
        self,
        db: Session,
        *,
        now: datetime,
        category: Optional[EventCategory] = None,
        text: Optional[str] = None,
        min_credits: int = 0,
        max_credits: int = 1000,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Event]:
        """Active events matching the filters, upcoming ones only unless a start date is given"""
        query = db.query(Event).filter(
            Event.status == EventStatus.ACTIVE,
            Event.credits >= min_credits,
            Event.credits <= max_credits,
        )
        query = query.filter(Event.date >= (start_date or now))
        if end_date is not None:
            query = query.filter(Event.date <= end_date)
        if category is not None:
            query = query.filter(Event.category == category)
        if text:
            pattern = f"%{text}%"
            query = query.filter(
                or_(
                    Event.title.ilike(pattern),
                    Event.description.ilike(pattern),
                    Event.location.ilike(pattern),
                )
            )
        return query.order_by(Event.date.asc()).all()


event = CRUDEvent(Event)
