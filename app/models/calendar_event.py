from sqlalchemy import Column, String, Date, DateTime, Time, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


# Palette offered by the calendar screen
EVENT_COLORS = {
    "#b8a9a1": "Beige",
    "#7cb082": "Green",
    "#e6b87d": "Orange",
    "#d48a8a": "Red",
    "#7ba3c4": "Blue",
    "#c4a77d": "Gold",
}
DEFAULT_EVENT_COLOR = "#b8a9a1"


class CalendarEvent(Base):
    """Dated entry on the shared calendar."""

    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_EVENT_COLOR)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="events")

    __table_args__ = (
        Index("idx_events_user_id", "user_id"),
        Index("idx_events_event_date", "event_date"),
    )
