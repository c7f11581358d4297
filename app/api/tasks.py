"""API endpoints for the shared task list."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.task_service import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


class TaskIn(BaseModel):
    text: str = Field(..., max_length=500)


class TaskOut(OwnedOut):
    text: str
    completed: bool
    created_at: Optional[datetime] = None


class TaskList(BaseModel):
    pending: List[TaskOut]
    completed: List[TaskOut]


@router.get("", response_model=TaskList)
async def list_tasks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Household tasks, newest first, split by completion."""
    groups = task_service.grouped(db, user.id)
    return TaskList(
        pending=serialize_all(TaskOut, groups["open"], user.id),
        completed=serialize_all(TaskOut, groups["done"], user.id),
    )


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = task_service.create_task(db, user.id, body.text)
    return serialize(TaskOut, task, user.id)


@router.patch("/{task_id}", response_model=TaskOut)
async def rename_task(
    task_id: UUID,
    body: TaskIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = task_service.rename_task(db, task_id, user.id, body.text)
    return serialize(TaskOut, task, user.id)


@router.post("/{task_id}/toggle", response_model=TaskOut)
async def toggle_task(task_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = task_service.toggle_completed(db, task_id, user.id)
    return serialize(TaskOut, task, user.id)


@router.delete("/{task_id}")
async def delete_task(task_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task_service.delete(db, task_id, user.id)
    return {"success": True}
