"""Business logic for user profiles."""

import logging
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.profile import Profile
from app.services.errors import NotFound, ValidationError
from app.services.partnership_service import partnership_service

logger = logging.getLogger(__name__)

_UNSET = object()


class ProfileService:
    """Service for profile-related operations."""

    @staticmethod
    def get_profile(db: Session, user_id: UUID) -> Profile:
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    @staticmethod
    def ensure_profile(db: Session, user_id: UUID, full_name: Optional[str] = None) -> Profile:
        """Return the user's profile, creating an empty one if it is missing."""
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None:
            profile = Profile(id=user_id, full_name=full_name)
            db.add(profile)
            db.flush()
        return profile

    @staticmethod
    def update_profile(
        db: Session,
        user_id: UUID,
        full_name=_UNSET,
        avatar_url=_UNSET,
    ) -> Profile:
        """
        Update the caller's own profile.

        Only fields that are passed are changed. A name, when given, must not
        be blank; passing ``avatar_url=None`` removes the avatar.
        """
        profile = ProfileService.ensure_profile(db, user_id)

        if full_name is not _UNSET:
            cleaned = (full_name or "").strip()
            if not cleaned:
                raise ValidationError("Name cannot be empty")
            profile.full_name = cleaned
        if avatar_url is not _UNSET:
            profile.avatar_url = (avatar_url or "").strip() or None

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def household_profiles(db: Session, viewer_id: UUID) -> Dict[str, Optional[Profile]]:
        """The viewer's profile and the accepted partner's profile (if any)."""
        partner_id = partnership_service.current_partner(db, viewer_id)
        partner = None
        if partner_id is not None:
            partner = db.query(Profile).filter(Profile.id == partner_id).first()
        return {"me": ProfileService.ensure_profile(db, viewer_id), "partner": partner}


# Singleton instance
profile_service = ProfileService()
