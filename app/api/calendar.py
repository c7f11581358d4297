"""API endpoints for the shared calendar."""

from datetime import date, datetime, time
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.calendar_event import EVENT_COLORS
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.calendar_service import calendar_service

router = APIRouter(prefix="/calendar", tags=["calendar"])


class EventIn(BaseModel):
    title: str = Field(..., max_length=255)
    event_date: date
    event_time: Optional[time] = None
    color: Optional[str] = None


class EventEdit(BaseModel):
    title: str = Field(..., max_length=255)
    event_time: Optional[time] = None
    color: Optional[str] = None


class EventOut(OwnedOut):
    title: str
    event_date: date
    event_time: Optional[time] = None
    color: str
    created_at: Optional[datetime] = None


class MonthView(BaseModel):
    year: int
    month: int
    days: Dict[date, List[EventOut]]


@router.get("/colors")
async def list_colors():
    """Palette of allowed event colours (hex -> name)."""
    return EVENT_COLORS


@router.get("", response_model=MonthView)
async def month_view(
    year: Optional[int] = Query(None, ge=1900, le=2100),
    month: Optional[int] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Events for every day of a month; defaults to the current month."""
    today = date.today()
    year = year or today.year
    month = month or today.month
    grid = calendar_service.month_grid(db, user.id, year, month)
    return MonthView(
        year=year,
        month=month,
        days={day: serialize_all(EventOut, events, user.id) for day, events in grid.items()},
    )


@router.get("/day/{day}", response_model=List[EventOut])
async def events_on_day(day: date, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return serialize_all(EventOut, calendar_service.events_on(db, user.id, day), user.id)


@router.post("/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(body: EventIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    event = calendar_service.create_event(
        db, user.id, body.title, body.event_date, event_time=body.event_time, color=body.color
    )
    return serialize(EventOut, event, user.id)


@router.put("/events/{event_id}", response_model=EventOut)
async def edit_event(
    event_id: UUID,
    body: EventEdit,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event = calendar_service.edit_event(
        db, event_id, user.id, body.title, event_time=body.event_time, color=body.color
    )
    return serialize(EventOut, event, user.id)


@router.delete("/events/{event_id}")
async def delete_event(event_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    calendar_service.delete(db, event_id, user.id)
    return {"success": True}
