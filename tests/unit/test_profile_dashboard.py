"""Unit tests for profile and dashboard services."""
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.models import Partnership, Profile, User
from app.services.dashboard_service import dashboard_service
from app.services.errors import ValidationError
from app.services.profile_service import profile_service
from tests.factories import (
    create_event,
    create_goal,
    create_memory,
    create_movie,
    create_partnership,
    create_shopping_item,
    create_task,
    create_wish,
)


class TestProfileService:
    """Tests for reading and updating profiles."""

    def test_update_only_given_fields(self, db: Session, test_user: User):
        profile_service.update_profile(db, test_user.id, avatar_url="https://img.example/a.png")

        profile = profile_service.get_profile(db, test_user.id)
        assert profile.full_name == "Alice"
        assert profile.avatar_url == "https://img.example/a.png"

    def test_blank_name_rejected(self, db: Session, test_user: User):
        with pytest.raises(ValidationError):
            profile_service.update_profile(db, test_user.id, full_name="   ")

    def test_clear_avatar(self, db: Session, test_user: User):
        profile_service.update_profile(db, test_user.id, avatar_url="https://img.example/a.png")
        profile = profile_service.update_profile(db, test_user.id, avatar_url=None)

        assert profile.avatar_url is None

    def test_ensure_profile_creates_missing(self, db: Session):
        user = User(email="bare@example.com")
        db.add(user)
        db.flush()

        profile = profile_service.ensure_profile(db, user.id, full_name="Bare")

        assert db.query(Profile).filter(Profile.id == user.id).one() is profile

    def test_household_profiles_alone(self, db: Session, test_user: User):
        profiles = profile_service.household_profiles(db, test_user.id)

        assert profiles["me"].id == test_user.id
        assert profiles["partner"] is None

    def test_household_profiles_with_partner(
        self, db: Session, partnership: Partnership, test_user: User, partner_user: User
    ):
        profiles = profile_service.household_profiles(db, test_user.id)

        assert profiles["partner"].full_name == "Bob"

    def test_pending_partner_not_exposed(
        self, db: Session, test_user: User, partner_user: User
    ):
        create_partnership(db, test_user, partner_user, status="pending")

        assert profile_service.household_profiles(db, test_user.id)["partner"] is None


class TestDashboardService:
    """Tests for the dashboard counters."""

    def test_empty(self, db: Session, test_user: User):
        summary = dashboard_service.summary(db, test_user.id)

        assert summary["open_tasks"] == 0
        assert summary["savings_progress_percent"] == 0.0
        assert summary["household_size"] == 1

    def test_counts_household_only(
        self,
        db: Session,
        partnership: Partnership,
        test_user: User,
        partner_user: User,
        outsider_user: User,
    ):
        create_task(db, test_user)
        create_task(db, partner_user)
        create_task(db, test_user, completed=True)
        create_task(db, outsider_user)
        create_shopping_item(db, partner_user)
        create_movie(db, test_user)
        create_movie(db, test_user, watched=True)
        create_goal(db, test_user, target_amount=Decimal("400"), current_amount=Decimal("100"))
        create_event(db, partner_user)
        create_wish(db, test_user)
        create_wish(db, test_user, purchased=True)
        create_memory(db, outsider_user)

        summary = dashboard_service.summary(db, test_user.id)

        assert summary["open_tasks"] == 2
        assert summary["shopping_to_buy"] == 1
        assert summary["movies_to_watch"] == 1
        assert float(summary["total_saved"]) == pytest.approx(100.0)
        assert float(summary["total_target"]) == pytest.approx(400.0)
        assert summary["savings_progress_percent"] == 25.0
        assert summary["events"] == 1
        assert summary["wishes"] == 1
        assert summary["memories"] == 0
        assert summary["household_size"] == 2
