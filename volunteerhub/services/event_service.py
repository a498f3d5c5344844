# File: volunteerhub/services/event_service.py
from datetime import datetime
from math import asin, cos, radians, sin, sqrt
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from volunteerhub import crud
from volunteerhub.core.config import settings
from volunteerhub.core.exceptions import ValidationFailed, WorkflowError
from volunteerhub.core.permissions import require_event_manager, require_role
from volunteerhub.core.principal import Principal
from volunteerhub.models.base import utcnow, to_naive_utc
from volunteerhub.models.event import Event, EventCategory, EventStatus
from volunteerhub.models.user import UserRole
from volunteerhub.schemas.event import EventCreate, EventUpdate
import logging

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres"""
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(sqrt(a))


class EventService:

    def __init__(self, db: Session):
        self.db = db

    def create_event(self, principal: Principal, event_in: EventCreate) -> Event:
        require_role(principal, UserRole.COMPANY, UserRole.ADMIN)

        event = Event(
            title=event_in.title.strip(),
            description=event_in.description.strip(),
            date=to_naive_utc(event_in.date),
            location=event_in.location.strip(),
            latitude=event_in.latitude,
            longitude=event_in.longitude,
            category=event_in.category,
            credits=event_in.credits,
            max_participants=event_in.max_participants,
            remaining_slots=event_in.max_participants,
            status=EventStatus.ACTIVE,
            credits_have_been_claimed=False,
            created_by=principal.user_id,
        )
        for action_in in event_in.actions:
            event.add_action(
                title=action_in.title,
                description=action_in.description,
                required_volunteers=action_in.required_volunteers,
                credits=action_in.credits,
            )
        event = crud.event.save(self.db, event)
        logger.info(f"Event {event.id} '{event.title}' created by user {principal.user_id}")
        return event

    def update_event(self, event_id: int, principal: Principal, event_in: EventUpdate) -> Event:
        update_data = event_in.model_dump(exclude_unset=True, exclude_none=True)
        if "date" in update_data:
            update_data["date"] = to_naive_utc(update_data["date"])

        try:
            event = crud.event.get_or_raise(self.db, event_id)
            require_event_manager(principal, event)
            event.update_details(update_data)
            event = crud.event.save(self.db, event)
        except WorkflowError:
            self.db.rollback()
            raise

        logger.info(f"Event {event_id} updated by user {principal.user_id}: {sorted(update_data)}")
        return event

    def delete_event(self, event_id: int, principal: Principal) -> None:
        event = crud.event.get_or_raise(self.db, event_id)
        require_event_manager(principal, event)
        crud.event.remove(self.db, db_obj=event)
        logger.info(f"Event {event_id} deleted by user {principal.user_id}")

    def get_event(self, event_id: int) -> Event:
        return crud.event.get_or_raise(self.db, event_id)

    def list_events(self, principal: Principal) -> List[Event]:
        return crud.event.get_visible_to(self.db, user_id=principal.user_id, role=principal.role)

    def list_own_events(self, principal: Principal) -> List[Event]:
        require_role(principal, UserRole.COMPANY, UserRole.ADMIN)
        return crud.event.get_by_owner(self.db, owner_id=principal.user_id)

    def list_approved_events(self, principal: Principal) -> List[Event]:
        """Events the volunteer was approved for, i.e. the chats they belong to"""
        require_role(principal, UserRole.VOLUNTEER)
        return crud.event.get_approved_for_volunteer(self.db, volunteer_id=principal.user_id)

    def search(
        self,
        *,
        category: Optional[EventCategory] = None,
        text: Optional[str] = None,
        min_credits: Optional[int] = None,
        max_credits: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        max_distance_km: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> List[Tuple[Event, Optional[float]]]:
        """Upcoming active events with their distance when a location is given"""
        if (latitude is None) != (longitude is None):
            raise ValidationFailed("Latitude and longitude must be given together")

        events = crud.event.search(
            self.db,
            now=now or utcnow(),
            category=category,
            text=text.strip() if text else None,
            min_credits=min_credits or 0,
            max_credits=max_credits if max_credits is not None else settings.SEARCH_MAX_CREDITS,
            start_date=to_naive_utc(start_date) if start_date else None,
            end_date=to_naive_utc(end_date) if end_date else None,
        )

        if latitude is None:
            return [(event, None) for event in events[: settings.SEARCH_RESULT_LIMIT]]

        radius = max_distance_km if max_distance_km is not None else settings.DEFAULT_SEARCH_RADIUS_KM
        nearby = []
        for event in events:
            if event.latitude is None or event.longitude is None:
                continue
            distance = haversine_km(latitude, longitude, event.latitude, event.longitude)
            if distance <= radius:
                nearby.append((event, round(distance, 3)))
        nearby.sort(key=lambda pair: pair[1])
        return nearby[: settings.SEARCH_RESULT_LIMIT]
