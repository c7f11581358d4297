from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    JSON,
    Numeric,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class Movie(Base):
    """Movie on the shared watchlist, optionally linked to Kinopoisk."""

    __tablename__ = "movies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(500), nullable=False)
    poster_url = Column(String(1024), nullable=True)
    kinopoisk_id = Column(String(32), nullable=True)
    comment = Column(Text, nullable=True)
    watched = Column(Boolean, nullable=False, default=False)
    rating = Column(Numeric(3, 1), nullable=True)  # Kinopoisk rating, 0-10
    genres = Column(JSON, nullable=True)  # list of genre names
    year = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="movies")

    __table_args__ = (Index("idx_movies_user_id", "user_id"),)
