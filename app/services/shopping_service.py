"""Business logic for the shared shopping list."""

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.shopping_item import ShoppingItem
from app.services.errors import ValidationError
from app.services.household_service import OwnedEntityService, require_text, split_by_flag


def _check_price(price: Optional[Decimal]) -> Optional[Decimal]:
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative")
    return price


class ShoppingService(OwnedEntityService):
    """Service for shopping list operations."""

    model = ShoppingItem
    editable_fields = ("name", "estimated_price", "purchased")

    def create_item(
        self,
        db: Session,
        owner_id: UUID,
        name: str,
        estimated_price: Optional[Decimal] = None,
    ) -> ShoppingItem:
        return self.create(
            db,
            owner_id,
            name=require_text(name, "Item name"),
            estimated_price=_check_price(estimated_price),
        )

    def edit_item(
        self,
        db: Session,
        item_id: UUID,
        viewer_id: UUID,
        name: str,
        estimated_price: Optional[Decimal] = None,
    ) -> ShoppingItem:
        return self.update(
            db,
            item_id,
            viewer_id,
            name=require_text(name, "Item name"),
            estimated_price=_check_price(estimated_price),
        )

    def toggle_purchased(self, db: Session, item_id: UUID, viewer_id: UUID) -> ShoppingItem:
        return self.toggle(db, item_id, viewer_id, "purchased")

    def grouped(self, db: Session, viewer_id: UUID) -> Dict[str, List[ShoppingItem]]:
        return split_by_flag(self.list_visible(db, viewer_id), "purchased")

    @staticmethod
    def estimated_total(items: List[ShoppingItem]) -> Decimal:
        """Sum of estimated prices; items without a price count as zero."""
        return sum((item.estimated_price or Decimal("0") for item in items), Decimal("0"))


# Singleton instance
shopping_service = ShoppingService()
