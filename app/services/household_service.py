"""
Shared CRUD for household-owned rows.

Every feature table (tasks, shopping items, movies, goals, expenses, events,
wishes, memories) has the same ownership shape: a row belongs to the user
who created it, is visible to that user's household, and can only be
changed or removed by its owner. Feature services subclass
``OwnedEntityService`` and add their own operations on top.
"""

import logging
from typing import Any, Dict, Iterable, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.services.errors import ValidationError
from app.services.visibility import get_visible, require_owner, visible_to

logger = logging.getLogger(__name__)


class OwnedEntityService:
    """Base service for one owned-entity model."""

    model = None
    # Fields an owner may change through ``update``
    editable_fields: Iterable[str] = ()

    def ordering(self) -> list:
        return [self.model.created_at.desc()]

    def query_visible(self, db: Session, viewer_id: UUID, *filters):
        """Query over rows in the viewer's household."""
        return db.query(self.model).filter(
            visible_to(self.model, db, viewer_id), *filters
        )

    def list_visible(self, db: Session, viewer_id: UUID, *filters) -> List[Any]:
        """All rows the viewer may see, in the feature's display order."""
        return self.query_visible(db, viewer_id, *filters).order_by(*self.ordering()).all()

    def count_visible(self, db: Session, viewer_id: UUID, *filters) -> int:
        return self.query_visible(db, viewer_id, *filters).count()

    def get(self, db: Session, entity_id: UUID, viewer_id: UUID):
        """Get one visible row, raising NotFound otherwise."""
        return get_visible(db, self.model, entity_id, viewer_id)

    def create(self, db: Session, owner_id: UUID, **fields):
        """Create a row owned by ``owner_id``."""
        entity = self.model(user_id=owner_id, **fields)
        db.add(entity)
        db.commit()
        db.refresh(entity)
        return entity

    def update(self, db: Session, entity_id: UUID, viewer_id: UUID, **changes):
        """
        Apply field changes to a row owned by the viewer.

        Unknown or non-editable field names are rejected before any write.
        """
        unknown = set(changes) - set(self.editable_fields)
        if unknown:
            raise ValidationError(f"Cannot edit: {', '.join(sorted(unknown))}")

        entity = self.get(db, entity_id, viewer_id)
        require_owner(viewer_id, entity)

        for field, value in changes.items():
            setattr(entity, field, value)
        db.commit()
        db.refresh(entity)
        return entity

    def toggle(self, db: Session, entity_id: UUID, viewer_id: UUID, field: str):
        """Flip a boolean flag on a row owned by the viewer."""
        entity = self.get(db, entity_id, viewer_id)
        require_owner(viewer_id, entity)

        setattr(entity, field, not getattr(entity, field))
        db.commit()
        db.refresh(entity)
        return entity

    def delete(self, db: Session, entity_id: UUID, viewer_id: UUID) -> bool:
        """Delete a row owned by the viewer."""
        entity = self.get(db, entity_id, viewer_id)
        require_owner(viewer_id, entity)

        db.delete(entity)
        db.commit()
        logger.debug("Deleted %s %s", self.model.__name__, entity_id)
        return True


def split_by_flag(items: Iterable[Any], flag: str) -> Dict[str, List[Any]]:
    """Partition rows into open/done lists by a boolean attribute."""
    open_items, done_items = [], []
    for item in items:
        (done_items if getattr(item, flag) else open_items).append(item)
    return {"open": open_items, "done": done_items}


def require_text(value: str, label: str) -> str:
    """Strip a required text field and reject blanks."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    return cleaned


def optional_text(value):
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
