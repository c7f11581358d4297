"""Business logic for the shared task list."""

from typing import Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.task import Task
from app.services.household_service import OwnedEntityService, require_text, split_by_flag


class TaskService(OwnedEntityService):
    """Service for task-related operations."""

    model = Task
    editable_fields = ("text", "completed")

    def create_task(self, db: Session, owner_id: UUID, text: str) -> Task:
        return self.create(db, owner_id, text=require_text(text, "Task text"))

    def rename_task(self, db: Session, task_id: UUID, viewer_id: UUID, text: str) -> Task:
        return self.update(db, task_id, viewer_id, text=require_text(text, "Task text"))

    def toggle_completed(self, db: Session, task_id: UUID, viewer_id: UUID) -> Task:
        return self.toggle(db, task_id, viewer_id, "completed")

    def grouped(self, db: Session, viewer_id: UUID) -> Dict[str, List[Task]]:
        """Tasks split into pending and completed, newest first."""
        return split_by_flag(self.list_visible(db, viewer_id), "completed")


# Singleton instance
task_service = TaskService()
