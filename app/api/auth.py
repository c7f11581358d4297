"""Authentication routes for registration, login, logout and account management."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.services.auth import get_auth_provider
from app.services.auth.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================

class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str
    full_name: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def email_has_domain(cls, v: str) -> str:
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    created_at: Optional[datetime] = None


def _with_session_cookie(response: JSONResponse, token: str) -> JSONResponse:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


def _user_payload(user: User) -> dict:
    return UserOut.model_validate(user).model_dump(mode="json")


# =============================================================================
# Registration / Login / Logout
# =============================================================================


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Create an account and log it in."""
    if len(body.password) < settings.password_min_length:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )

    email = body.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    auth_provider = get_auth_provider()
    user = await auth_provider.create_user(db, email, body.password, full_name=body.full_name)
    token = await auth_provider.create_session(db, user, request)

    logger.info("Registered user %s", user.id)
    response = JSONResponse(status_code=status.HTTP_201_CREATED, content=_user_payload(user))
    return _with_session_cookie(response, token)


@router.post("/login")
async def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
):
    """Check credentials and start a session."""
    auth_provider = get_auth_provider()
    user = await auth_provider.authenticate(db, body.email, body.password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = await auth_provider.create_session(db, user, request)
    return _with_session_cookie(JSONResponse(content=_user_payload(user)), token)


@router.post("/logout")
async def logout(request: Request, db: Session = Depends(get_db)):
    """Logout and clear session."""
    auth_provider = get_auth_provider()

    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await auth_provider.revoke_session(db, token)

    response = JSONResponse(content={"success": True})
    response.delete_cookie(settings.session_cookie_name)
    return response


# =============================================================================
# Account Management
# =============================================================================


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    """Currently logged-in account."""
    return user


@router.post("/change-password")
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change the caller's password and log out their other sessions."""
    if len(body.new_password) < settings.password_min_length:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )

    auth_provider = get_auth_provider()
    success = await auth_provider.change_password(
        db, user, body.current_password, body.new_password
    )
    if not success:
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    current_token = request.cookies.get(settings.session_cookie_name)
    revoked = await auth_provider.revoke_all_sessions(db, user.id, except_token=current_token)
    return {"success": True, "sessions_revoked": revoked}
