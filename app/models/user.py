from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class User(Base):
    """User model for authentication and data ownership."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    profile = relationship(
        "Profile",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    sessions = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )
    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan")
    shopping_items = relationship(
        "ShoppingItem", back_populates="user", cascade="all, delete-orphan"
    )
    movies = relationship("Movie", back_populates="user", cascade="all, delete-orphan")
    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship(
        "Expense", back_populates="user", cascade="all, delete-orphan"
    )
    events = relationship(
        "CalendarEvent", back_populates="user", cascade="all, delete-orphan"
    )
    wishes = relationship("Wish", back_populates="user", cascade="all, delete-orphan")
    memories = relationship(
        "Memory", back_populates="user", cascade="all, delete-orphan"
    )
