"""API endpoints for the wishlist."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.wishlist_service import DEFAULT_PRIORITY, wishlist_service

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


class WishIn(BaseModel):
    title: str = Field(..., max_length=500)
    price: Optional[Decimal] = None
    priority: int = DEFAULT_PRIORITY
    comment: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=1024)


class WishOut(OwnedOut):
    title: str
    price: Optional[float] = None
    priority: int
    comment: Optional[str] = None
    image_url: Optional[str] = None
    reserved: bool
    purchased: bool
    created_at: Optional[datetime] = None


class Wishlist(BaseModel):
    active: List[WishOut]
    purchased: List[WishOut]


@router.get("", response_model=Wishlist)
async def list_wishes(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Wishes by priority, split into active and purchased."""
    groups = wishlist_service.grouped(db, user.id)
    return Wishlist(
        active=serialize_all(WishOut, groups["open"], user.id),
        purchased=serialize_all(WishOut, groups["done"], user.id),
    )


@router.post("", response_model=WishOut, status_code=status.HTTP_201_CREATED)
async def add_wish(body: WishIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    wish = wishlist_service.create_wish(
        db,
        user.id,
        body.title,
        price=body.price,
        priority=body.priority,
        comment=body.comment,
        image_url=body.image_url,
    )
    return serialize(WishOut, wish, user.id)


@router.put("/{wish_id}", response_model=WishOut)
async def edit_wish(
    wish_id: UUID,
    body: WishIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    wish = wishlist_service.edit_wish(
        db,
        wish_id,
        user.id,
        body.title,
        price=body.price,
        priority=body.priority,
        comment=body.comment,
    )
    return serialize(WishOut, wish, user.id)


@router.post("/{wish_id}/reserve", response_model=WishOut)
async def toggle_reserved(wish_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    wish = wishlist_service.toggle_reserved(db, wish_id, user.id)
    return serialize(WishOut, wish, user.id)


@router.post("/{wish_id}/purchase", response_model=WishOut)
async def toggle_purchased(wish_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    wish = wishlist_service.toggle_purchased(db, wish_id, user.id)
    return serialize(WishOut, wish, user.id)


@router.delete("/{wish_id}")
async def delete_wish(wish_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    wishlist_service.delete(db, wish_id, user.id)
    return {"success": True}
