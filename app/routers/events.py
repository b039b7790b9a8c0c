from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from app.routers.deps import get_current_user_optional, get_event_service
from app.schemas.event import (
    AttendanceUpdate,
    EventCreate,
    EventOut,
    EventUpdate,
    EventView,
)
from app.schemas.user import UserOut
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=List[EventView])
async def list_events(
    city: Optional[str] = Query(None, description="Filter by city"),
    category: Optional[str] = Query(None, description="Filter by category"),
    fromDate: Optional[date] = Query(
        None, description="Events on or after this date (ISO format)"
    ),
    toDate: Optional[date] = Query(
        None, description="Events on or before this date (ISO format)"
    ),
    searchQuery: Optional[str] = Query(
        None, description="Search in title and description"
    ),
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    """List events matching all given filters"""
    filters = {}

    if city:
        filters["city"] = city
    if category:
        filters["category"] = category
    if fromDate:
        filters["fromDate"] = fromDate
    if toDate:
        filters["toDate"] = toDate
    if searchQuery:
        filters["searchQuery"] = searchQuery

    return event_service.list_events(filters, current_user)


@router.get("/categories", response_model=List[str])
async def list_categories(event_service: EventService = Depends(get_event_service)):
    return event_service.list_categories()


@router.get("/cities", response_model=List[str])
async def list_cities(event_service: EventService = Depends(get_event_service)):
    """Cities that currently have events"""
    return event_service.list_cities()


@router.get("/{event_id}", response_model=EventView)
async def get_event(
    event_id: str,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    return event_service.get_event(event_id, current_user)


@router.post("/", response_model=EventOut, status_code=201)
async def create_event(
    event_data: EventCreate,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    """Create a new event (admin only)"""
    return event_service.create_event(event_data, current_user)


@router.patch("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: str,
    patch: EventUpdate,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    """Update the given fields of an event (admin only)"""
    return event_service.update_event(event_id, patch, current_user)


@router.delete("/{event_id}", response_model=Dict[str, bool])
async def delete_event(
    event_id: str,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    """Delete an event and its likes/attendance records (admin only)"""
    return event_service.delete_event(event_id, current_user)


@router.post("/{event_id}/like", response_model=EventView)
async def toggle_like(
    event_id: str,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    return event_service.toggle_like(event_id, current_user)


@router.put("/{event_id}/attendance", response_model=EventView)
async def set_attendance(
    event_id: str,
    attendance: AttendanceUpdate,
    event_service: EventService = Depends(get_event_service),
    current_user: Optional[UserOut] = Depends(get_current_user_optional),
):
    """Set attendance to attending, notAttending or null"""
    return event_service.set_attendance(event_id, attendance.status, current_user)
