from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


DEFAULT_WISH_IMAGE = "🎁"


class Wish(Base):
    """Wishlist entry. The partner can reserve it before buying."""

    __tablename__ = "wishes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(500), nullable=False)
    price = Column(Numeric(12, 2), nullable=True)
    priority = Column(Integer, nullable=False, default=3)  # 1-5 stars
    comment = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True, default=DEFAULT_WISH_IMAGE)  # emoji or URL
    reserved = Column(Boolean, nullable=False, default=False)
    purchased = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="wishes")

    __table_args__ = (Index("idx_wishes_user_id", "user_id"),)
