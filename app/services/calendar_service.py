"""Business logic for the shared calendar."""

from datetime import date, time, timedelta
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.calendar_event import DEFAULT_EVENT_COLOR, EVENT_COLORS, CalendarEvent
from app.services.errors import ValidationError
from app.services.household_service import OwnedEntityService, require_text


def _check_color(color: Optional[str]) -> str:
    color = (color or DEFAULT_EVENT_COLOR).lower()
    if color not in EVENT_COLORS:
        raise ValidationError(f"Unknown colour {color}")
    return color


def month_bounds(year: int, month: int) -> tuple:
    """First day of the month and first day of the following month."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


class CalendarService(OwnedEntityService):
    """Service for calendar event operations."""

    model = CalendarEvent
    editable_fields = ("title", "event_date", "event_time", "color")

    def ordering(self) -> list:
        return [
            CalendarEvent.event_date.asc(),
            CalendarEvent.event_time.asc().nullsfirst(),
            CalendarEvent.created_at.asc(),
        ]

    def create_event(
        self,
        db: Session,
        owner_id: UUID,
        title: str,
        event_date: date,
        event_time: Optional[time] = None,
        color: Optional[str] = None,
    ) -> CalendarEvent:
        return self.create(
            db,
            owner_id,
            title=require_text(title, "Event title"),
            event_date=event_date,
            event_time=event_time,
            color=_check_color(color),
        )

    def edit_event(
        self,
        db: Session,
        event_id: UUID,
        viewer_id: UUID,
        title: str,
        event_time: Optional[time] = None,
        color: Optional[str] = None,
    ) -> CalendarEvent:
        return self.update(
            db,
            event_id,
            viewer_id,
            title=require_text(title, "Event title"),
            event_time=event_time,
            color=_check_color(color),
        )

    def events_on(self, db: Session, viewer_id: UUID, day: date) -> List[CalendarEvent]:
        """Events on a single day."""
        return self.list_visible(db, viewer_id, CalendarEvent.event_date == day)

    def events_in_month(
        self, db: Session, viewer_id: UUID, year: int, month: int
    ) -> List[CalendarEvent]:
        start, end = month_bounds(year, month)
        return self.list_visible(
            db,
            viewer_id,
            CalendarEvent.event_date >= start,
            CalendarEvent.event_date < end,
        )

    def month_grid(
        self, db: Session, viewer_id: UUID, year: int, month: int
    ) -> Dict[date, List[CalendarEvent]]:
        """Events keyed by day for every day of the month (empty days included)."""
        start, end = month_bounds(year, month)
        grid: Dict[date, List[CalendarEvent]] = {}
        day = start
        while day < end:
            grid[day] = []
            day += timedelta(days=1)
        for event in self.events_in_month(db, viewer_id, year, month):
            grid[event.event_date].append(event)
        return grid


# Singleton instance
calendar_service = CalendarService()
