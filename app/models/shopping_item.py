from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Index, Numeric, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class ShoppingItem(Base):
    """Entry on the shared shopping list."""

    __tablename__ = "shopping_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    estimated_price = Column(Numeric(12, 2), nullable=True)
    purchased = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="shopping_items")

    __table_args__ = (Index("idx_shopping_items_user_id", "user_id"),)
