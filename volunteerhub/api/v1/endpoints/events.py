# File: volunteerhub/api/v1/endpoints/events.py
from datetime import datetime
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from volunteerhub import schemas
from volunteerhub.api.deps import get_current_principal
from volunteerhub.core.principal import Principal
from volunteerhub.db.database import get_db
from volunteerhub.models.event import EventCategory
from volunteerhub.services.event_service import EventService

router = APIRouter()


@router.get("/", response_model=List[schemas.event.Event])
def list_events(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Events visible to the caller's role"""
    return EventService(db).list_events(principal)


@router.post("/", response_model=schemas.event.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: schemas.event.EventCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    return EventService(db).create_event(principal, event_in)


@router.get("/search", response_model=List[schemas.event.EventSearchResult])
def search_events(
    db: Session = Depends(get_db),
    category: Optional[EventCategory] = None,
    search_text: Optional[str] = Query(None, alias="searchText"),
    min_credits: Optional[int] = Query(None, alias="minCredits", ge=0),
    max_credits: Optional[int] = Query(None, alias="maxCredits", ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    max_distance: Optional[float] = Query(None, alias="maxDistance", gt=0),
) -> Any:
    """Public search over upcoming active events"""
    results = EventService(db).search(
        category=category,
        text=search_text,
        min_credits=min_credits,
        max_credits=max_credits,
        start_date=start_date,
        end_date=end_date,
        latitude=latitude,
        longitude=longitude,
        max_distance_km=max_distance,
    )
    return [
        schemas.event.EventSearchResult(
            id=event.id,
            title=event.title,
            description=event.description,
            location=event.location,
            latitude=event.latitude,
            longitude=event.longitude,
            category=event.category,
            date=event.date,
            credits=event.credits,
            distance_km=distance,
        )
        for event, distance in results
    ]


@router.get("/mine", response_model=List[schemas.event.Event])
def list_own_events(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Events created by the calling company or admin"""
    return EventService(db).list_own_events(principal)


@router.get("/approved", response_model=List[schemas.event.Event])
def list_approved_events(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Events the calling volunteer was approved for"""
    return EventService(db).list_approved_events(principal)


@router.get("/{event_id}", response_model=schemas.event.Event)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    return EventService(db).get_event(event_id)


@router.patch("/{event_id}", response_model=schemas.event.Event)
def update_event(
    event_id: int,
    event_in: schemas.event.EventUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    return EventService(db).update_event(event_id, principal, event_in)


@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    EventService(db).delete_event(event_id, principal)
    return {"success": True, "message": "Event deleted successfully"}
