"""
Database models for Our Home.

Import all models here so Alembic can detect them for migrations.
"""

from app.database import Base
from app.models.user import User
from app.models.profile import Profile
from app.models.session import Session
from app.models.partnership import Partnership, PartnershipStatus, ACTIVE_STATUSES
from app.models.task import Task
from app.models.shopping_item import ShoppingItem
from app.models.movie import Movie
from app.models.goal import Goal
from app.models.expense import Expense
from app.models.calendar_event import CalendarEvent, EVENT_COLORS, DEFAULT_EVENT_COLOR
from app.models.wish import Wish, DEFAULT_WISH_IMAGE
from app.models.memory import Memory

# Feature tables whose rows carry a single owner and follow the household
# visibility rule.
OWNED_MODELS = (Task, ShoppingItem, Movie, Goal, Expense, CalendarEvent, Wish, Memory)

__all__ = [
    "Base",
    "User",
    "Profile",
    "Session",
    "Partnership",
    "PartnershipStatus",
    "ACTIVE_STATUSES",
    "Task",
    "ShoppingItem",
    "Movie",
    "Goal",
    "Expense",
    "CalendarEvent",
    "EVENT_COLORS",
    "DEFAULT_EVENT_COLOR",
    "Wish",
    "DEFAULT_WISH_IMAGE",
    "Memory",
    "OWNED_MODELS",
]
