"""API endpoints for the memories timeline."""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.memory_service import memory_service

router = APIRouter(prefix="/memories", tags=["memories"])


class MemoryIn(BaseModel):
    content: str
    happened_at: Optional[date] = None
    image_url: Optional[str] = Field(None, max_length=1024)


class MemoryEdit(BaseModel):
    content: str


class MemoryOut(OwnedOut):
    content: str
    image_url: Optional[str] = None
    happened_at: date
    created_at: Optional[datetime] = None


@router.get("", response_model=List[MemoryOut])
async def list_memories(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Timeline, most recent first."""
    return serialize_all(MemoryOut, memory_service.list_visible(db, user.id), user.id)


@router.post("", response_model=MemoryOut, status_code=status.HTTP_201_CREATED)
async def add_memory(body: MemoryIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    memory = memory_service.create_memory(
        db, user.id, body.content, happened_at=body.happened_at, image_url=body.image_url
    )
    return serialize(MemoryOut, memory, user.id)


@router.patch("/{memory_id}", response_model=MemoryOut)
async def edit_memory(
    memory_id: UUID,
    body: MemoryEdit,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    memory = memory_service.edit_content(db, memory_id, user.id, body.content)
    return serialize(MemoryOut, memory, user.id)


@router.delete("/{memory_id}")
async def delete_memory(memory_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    memory_service.delete(db, memory_id, user.id)
    return {"success": True}
