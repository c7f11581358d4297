"""Business logic for the memories timeline."""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.memory import Memory
from app.services.household_service import OwnedEntityService, optional_text, require_text


class MemoryService(OwnedEntityService):
    """Service for memory timeline operations."""

    model = Memory
    editable_fields = ("content", "image_url", "happened_at")

    def ordering(self) -> list:
        return [Memory.happened_at.desc(), Memory.created_at.desc()]

    def create_memory(
        self,
        db: Session,
        owner_id: UUID,
        content: str,
        happened_at: Optional[date] = None,
        image_url: Optional[str] = None,
    ) -> Memory:
        return self.create(
            db,
            owner_id,
            content=require_text(content, "Memory text"),
            happened_at=happened_at or date.today(),
            image_url=optional_text(image_url),
        )

    def edit_content(self, db: Session, memory_id: UUID, viewer_id: UUID, content: str) -> Memory:
        return self.update(db, memory_id, viewer_id, content=require_text(content, "Memory text"))


# Singleton instance
memory_service = MemoryService()
