"""
Household visibility rule.

A viewer sees rows owned by themselves and by their accepted partner, and
nobody else. Every list query for owned entities filters through
``visible_to``; the row checks below are used before single-row reads and
mutations.
"""

from typing import Optional, Set
from uuid import UUID

from sqlalchemy.orm import Session

from app.services.errors import Forbidden, NotFound
from app.services.partnership_service import partnership_service


def visible_owner_ids(db: Session, viewer_id: UUID) -> Set[UUID]:
    """Return the viewer's household: themselves plus the accepted partner."""
    owners = {viewer_id}
    partner_id = partnership_service.current_partner(db, viewer_id)
    if partner_id is not None:
        owners.add(partner_id)
    return owners


def visible_to(model, db: Session, viewer_id: UUID):
    """SQL filter clause restricting ``model`` to rows the viewer may see."""
    return model.user_id.in_(visible_owner_ids(db, viewer_id))


def can_view(db: Session, viewer_id: UUID, entity) -> bool:
    return entity.user_id in visible_owner_ids(db, viewer_id)


def get_visible(db: Session, model, entity_id: UUID, viewer_id: UUID):
    """
    Load a single row the viewer is allowed to see.

    Rows outside the household are reported as missing so their existence
    does not leak across households.
    """
    entity: Optional[object] = (
        db.query(model)
        .filter(model.id == entity_id, visible_to(model, db, viewer_id))
        .first()
    )
    if entity is None:
        raise NotFound(f"{model.__name__} not found")
    return entity


def require_owner(viewer_id: UUID, entity) -> None:
    """Only the owner may update or delete a row."""
    if entity.user_id != viewer_id:
        raise Forbidden("Only the person who added this can change it")
