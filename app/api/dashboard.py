"""Dashboard summary endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.dashboard_service import dashboard_service
from app.services.partnership_service import HouseholdState, partnership_service
from app.services.profile_service import profile_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardOut(BaseModel):
    full_name: Optional[str] = None
    partner_name: Optional[str] = None
    household_state: HouseholdState
    open_tasks: int
    shopping_to_buy: int
    movies_to_watch: int
    total_saved: float
    total_target: float
    savings_progress_percent: float
    events: int
    wishes: int
    memories: int
    household_size: int


@router.get("", response_model=DashboardOut)
async def dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    summary = dashboard_service.summary(db, user.id)
    profiles = profile_service.household_profiles(db, user.id)
    me, partner = profiles["me"], profiles["partner"]

    return DashboardOut(
        full_name=me.full_name if me else None,
        partner_name=partner.full_name if partner else None,
        household_state=partnership_service.state_for(db, user.id),
        open_tasks=summary["open_tasks"],
        shopping_to_buy=summary["shopping_to_buy"],
        movies_to_watch=summary["movies_to_watch"],
        total_saved=float(summary["total_saved"]),
        total_target=float(summary["total_target"]),
        savings_progress_percent=summary["savings_progress_percent"],
        events=summary["events"],
        wishes=summary["wishes"],
        memories=summary["memories"],
        household_size=summary["household_size"],
    )
