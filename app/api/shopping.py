"""API endpoints for the shared shopping list."""

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
from app.services.shopping_service import ShoppingService, shopping_service

router = APIRouter(prefix="/shopping", tags=["shopping"])


class ShoppingItemIn(BaseModel):
    name: str = Field(..., max_length=255)
    estimated_price: Optional[Decimal] = None


class ShoppingItemOut(OwnedOut):
    name: str
    estimated_price: Optional[float] = None
    purchased: bool
    created_at: Optional[datetime] = None


class ShoppingList(BaseModel):
    to_buy: List[ShoppingItemOut]
    purchased: List[ShoppingItemOut]
    estimated_total: float


@router.get("", response_model=ShoppingList)
async def list_items(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Items still to buy, already bought, and what the rest should cost."""
    groups = shopping_service.grouped(db, user.id)
    return ShoppingList(
        to_buy=serialize_all(ShoppingItemOut, groups["open"], user.id),
        purchased=serialize_all(ShoppingItemOut, groups["done"], user.id),
        estimated_total=float(ShoppingService.estimated_total(groups["open"])),
    )


@router.post("", response_model=ShoppingItemOut, status_code=status.HTTP_201_CREATED)
async def add_item(body: ShoppingItemIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    item = shopping_service.create_item(db, user.id, body.name, body.estimated_price)
    return serialize(ShoppingItemOut, item, user.id)


@router.put("/{item_id}", response_model=ShoppingItemOut)
async def edit_item(
    item_id: UUID,
    body: ShoppingItemIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = shopping_service.edit_item(db, item_id, user.id, body.name, body.estimated_price)
    return serialize(ShoppingItemOut, item, user.id)


@router.post("/{item_id}/toggle", response_model=ShoppingItemOut)
async def toggle_item(item_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    item = shopping_service.toggle_purchased(db, item_id, user.id)
    return serialize(ShoppingItemOut, item, user.id)


@router.delete("/{item_id}")
async def delete_item(item_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    shopping_service.delete(db, item_id, user.id)
    return {"success": True}
