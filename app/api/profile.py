"""API endpoints for the user's profile and the partner's public profile."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.profile_service import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class HouseholdProfiles(BaseModel):
    me: ProfileOut
    partner: Optional[ProfileOut] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=1024)


@router.get("", response_model=HouseholdProfiles)
async def get_profiles(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Your profile and, when paired, your partner's."""
    return profile_service.household_profiles(db, user.id)


@router.patch("", response_model=ProfileOut)
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update your name and/or avatar URL. Omitted fields are left as they are."""
    changes = {field: getattr(body, field) for field in body.model_fields_set}
    return profile_service.update_profile(db, user.id, **changes)
