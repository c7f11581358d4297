"""API endpoints for pairing two accounts into a household."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.partnership import Partnership
from app.models.profile import Profile
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.partnership_service import HouseholdState, partnership_service

router = APIRouter(prefix="/partnership", tags=["partnership"])


# =============================================================================
# Request/Response Models
# =============================================================================

class InviteRequest(BaseModel):
    email: str


class RespondRequest(BaseModel):
    accept: bool


class PartnershipOut(BaseModel):
    id: UUID
    status: str
    user_a: UUID
    user_b: UUID
    invited_by: UUID
    sent_by_me: bool
    other_user_id: UUID
    other_email: Optional[str] = None
    other_name: Optional[str] = None
    other_avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    dissolved_at: Optional[datetime] = None


class PartnershipOverview(BaseModel):
    state: HouseholdState
    partnership: Optional[PartnershipOut] = None
    pending_received: List[PartnershipOut] = []
    pending_sent: List[PartnershipOut] = []


def _to_out(db: Session, partnership: Partnership, viewer_id: UUID) -> PartnershipOut:
    other_id = partnership.other_member(viewer_id)
    other_user = db.query(User).filter(User.id == other_id).first()
    other_profile = db.query(Profile).filter(Profile.id == other_id).first()

    return PartnershipOut(
        id=partnership.id,
        status=partnership.status.value,
        user_a=partnership.user_a,
        user_b=partnership.user_b,
        invited_by=partnership.invited_by,
        sent_by_me=partnership.invited_by == viewer_id,
        other_user_id=other_id,
        other_email=other_user.email if other_user else None,
        other_name=other_profile.full_name if other_profile else None,
        other_avatar_url=other_profile.avatar_url if other_profile else None,
        created_at=partnership.created_at,
        responded_at=partnership.responded_at,
        dissolved_at=partnership.dissolved_at,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=PartnershipOverview)
async def get_partnership(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current state, the active partnership and any open invitations."""
    active = partnership_service.get_active(db, user.id)
    return PartnershipOverview(
        state=partnership_service.state_for(db, user.id),
        partnership=_to_out(db, active, user.id) if active else None,
        pending_received=[
            _to_out(db, p, user.id) for p in partnership_service.pending_received(db, user.id)
        ],
        pending_sent=[
            _to_out(db, p, user.id) for p in partnership_service.pending_sent(db, user.id)
        ],
    )


@router.post("/invite", response_model=PartnershipOut, status_code=status.HTTP_201_CREATED)
async def invite_partner(
    body: InviteRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Invite the account registered under an email to become your partner."""
    partnership = partnership_service.invite(db, user.id, body.email)
    return _to_out(db, partnership, user.id)


@router.post("/{partnership_id}/respond", response_model=PartnershipOut)
async def respond_to_invite(
    partnership_id: UUID,
    body: RespondRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept or reject an invitation addressed to you."""
    partnership = partnership_service.respond(db, user.id, partnership_id, body.accept)
    return _to_out(db, partnership, user.id)


@router.post("/{partnership_id}/dissolve", response_model=PartnershipOut)
async def dissolve_partnership(
    partnership_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """End your partnership. Shared data stops being visible to the other side."""
    partnership = partnership_service.dissolve(db, user.id, partnership_id)
    return _to_out(db, partnership, user.id)


@router.post("/{partnership_id}/cancel")
async def cancel_invite(
    partnership_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Withdraw an invitation you sent that has not been answered yet."""
    partnership_service.cancel(db, user.id, partnership_id)
    return {"success": True}
