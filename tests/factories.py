"""
Factory functions for creating test data.

These factories create model instances with sensible defaults.
Use db.flush() to get IDs without committing (for transaction rollback).
"""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional
import secrets

import bcrypt
from sqlalchemy.orm import Session

from app.models import (
    CalendarEvent,
    Expense,
    Goal,
    Memory,
    Movie,
    Partnership,
    PartnershipStatus,
    Profile,
    ShoppingItem,
    Task,
    User,
    Wish,
    Session as UserSession,
)
from app.services.partnership_service import canonical_pair


# =============================================================================
# User Factory
# =============================================================================


def create_user(
    db: Session,
    email: Optional[str] = None,
    password: str = "testpassword123",
    full_name: Optional[str] = None,
    **overrides,
) -> User:
    """
    Create a test user with hashed password and a profile.

    Args:
        db: Database session
        email: User email (auto-generated if not provided)
        password: Plain text password to hash
        full_name: Display name stored on the profile
        **overrides: Additional fields to override

    Returns:
        Created User object
    """
    if email is None:
        email = f"testuser_{secrets.token_hex(4)}@example.com"

    password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode(
        "utf-8"
    )

    defaults = {
        "email": email.lower(),
        "password_hash": password_hash,
    }
    defaults.update(overrides)

    user = User(**defaults)
    db.add(user)
    db.flush()

    db.add(Profile(id=user.id, full_name=full_name))
    db.flush()
    return user


# =============================================================================
# Session Factory
# =============================================================================


def create_session(
    db: Session,
    user: User,
    expires_in: timedelta = timedelta(days=7),
    user_agent: str = "pytest-test-client",
    ip_address: str = "127.0.0.1",
    **overrides,
) -> UserSession:
    """Create a login session for a user."""
    defaults = {
        "user_id": user.id,
        "token": secrets.token_urlsafe(32),
        "expires_at": datetime.now(timezone.utc) + expires_in,
        "user_agent": user_agent,
        "ip_address": ip_address,
    }
    defaults.update(overrides)

    session = UserSession(**defaults)
    db.add(session)
    db.flush()
    return session


# =============================================================================
# Partnership Factory
# =============================================================================


def create_partnership(
    db: Session,
    inviter: User,
    invitee: User,
    status: str = "pending",
    **overrides,
) -> Partnership:
    """
    Create a partnership row directly, bypassing the service checks.

    Args:
        db: Database session
        inviter: User who sent the invitation
        invitee: User who received it
        status: pending, accepted, rejected or dissolved
        **overrides: Additional fields to override
    """
    user_a, user_b = canonical_pair(inviter.id, invitee.id)
    status = PartnershipStatus(status)
    now = datetime.now(timezone.utc)

    defaults = {
        "user_a": user_a,
        "user_b": user_b,
        "status": status,
        "invited_by": inviter.id,
        "responded_at": now if status != PartnershipStatus.PENDING else None,
        "dissolved_at": now if status == PartnershipStatus.DISSOLVED else None,
    }
    defaults.update(overrides)

    partnership = Partnership(**defaults)
    db.add(partnership)
    db.flush()
    return partnership


# =============================================================================
# Household Data Factories
# =============================================================================


def create_task(db: Session, user: User, text: str = "Take out the trash", **overrides) -> Task:
    task = Task(user_id=user.id, text=text, completed=overrides.pop("completed", False), **overrides)
    db.add(task)
    db.flush()
    return task


def create_shopping_item(
    db: Session,
    user: User,
    name: str = "Milk",
    estimated_price: Optional[Decimal] = None,
    **overrides,
) -> ShoppingItem:
    item = ShoppingItem(
        user_id=user.id,
        name=name,
        estimated_price=estimated_price,
        purchased=overrides.pop("purchased", False),
        **overrides,
    )
    db.add(item)
    db.flush()
    return item


def create_movie(db: Session, user: User, title: str = "Amelie", **overrides) -> Movie:
    movie = Movie(user_id=user.id, title=title, watched=overrides.pop("watched", False), **overrides)
    db.add(movie)
    db.flush()
    return movie


def create_goal(
    db: Session,
    user: User,
    name: str = "Vacation",
    target_amount: Decimal = Decimal("1000"),
    current_amount: Decimal = Decimal("0"),
    **overrides,
) -> Goal:
    goal = Goal(
        user_id=user.id,
        name=name,
        target_amount=target_amount,
        current_amount=current_amount,
        **overrides,
    )
    db.add(goal)
    db.flush()
    return goal


def create_expense(
    db: Session,
    user: User,
    description: str = "Groceries",
    amount: Decimal = Decimal("25.50"),
    spent_on: Optional[date] = None,
    category: str = "food",
    **overrides,
) -> Expense:
    expense = Expense(
        user_id=user.id,
        description=description,
        amount=amount,
        date=spent_on or date.today(),
        category=category,
        **overrides,
    )
    db.add(expense)
    db.flush()
    return expense


def create_event(
    db: Session,
    user: User,
    title: str = "Dinner with friends",
    event_date: Optional[date] = None,
    event_time: Optional[time] = None,
    color: str = "#b8a9a1",
    **overrides,
) -> CalendarEvent:
    event = CalendarEvent(
        user_id=user.id,
        title=title,
        event_date=event_date or date.today(),
        event_time=event_time,
        color=color,
        **overrides,
    )
    db.add(event)
    db.flush()
    return event


def create_wish(
    db: Session,
    user: User,
    title: str = "Coffee grinder",
    priority: int = 3,
    **overrides,
) -> Wish:
    wish = Wish(
        user_id=user.id,
        title=title,
        priority=priority,
        reserved=overrides.pop("reserved", False),
        purchased=overrides.pop("purchased", False),
        **overrides,
    )
    db.add(wish)
    db.flush()
    return wish


def create_memory(
    db: Session,
    user: User,
    content: str = "First trip to the sea",
    happened_at: Optional[date] = None,
    **overrides,
) -> Memory:
    memory = Memory(
        user_id=user.id,
        content=content,
        happened_at=happened_at or date.today(),
        **overrides,
    )
    db.add(memory)
    db.flush()
    return memory
