"""Business logic for the wishlist."""

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.wish import DEFAULT_WISH_IMAGE, Wish
from app.services.errors import ValidationError
from app.services.household_service import (
    OwnedEntityService,
    optional_text,
    require_text,
    split_by_flag,
)

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = 3


def _validate(priority: int, price: Optional[Decimal]) -> None:
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValidationError(f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}")
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative")


class WishlistService(OwnedEntityService):
    """Service for wishlist operations."""

    model = Wish
    editable_fields = ("title", "price", "priority", "comment", "image_url")

    def ordering(self) -> list:
        return [Wish.priority.desc(), Wish.created_at.desc()]

    def create_wish(
        self,
        db: Session,
        owner_id: UUID,
        title: str,
        price: Optional[Decimal] = None,
        priority: int = DEFAULT_PRIORITY,
        comment: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Wish:
        _validate(priority, price)
        return self.create(
            db,
            owner_id,
            title=require_text(title, "Title"),
            price=price,
            priority=priority,
            comment=optional_text(comment),
            image_url=optional_text(image_url) or DEFAULT_WISH_IMAGE,
        )

    def edit_wish(
        self,
        db: Session,
        wish_id: UUID,
        viewer_id: UUID,
        title: str,
        price: Optional[Decimal] = None,
        priority: int = DEFAULT_PRIORITY,
        comment: Optional[str] = None,
    ) -> Wish:
        _validate(priority, price)
        return self.update(
            db,
            wish_id,
            viewer_id,
            title=require_text(title, "Title"),
            price=price,
            priority=priority,
            comment=optional_text(comment),
        )

    def toggle_reserved(self, db: Session, wish_id: UUID, viewer_id: UUID) -> Wish:
        return self.toggle(db, wish_id, viewer_id, "reserved")

    def toggle_purchased(self, db: Session, wish_id: UUID, viewer_id: UUID) -> Wish:
        return self.toggle(db, wish_id, viewer_id, "purchased")

    def grouped(self, db: Session, viewer_id: UUID) -> Dict[str, List[Wish]]:
        """Active and purchased wishes, highest priority first."""
        return split_by_flag(self.list_visible(db, viewer_id), "purchased")


# Singleton instance
wishlist_service = WishlistService()
