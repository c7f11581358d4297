from datetime import date

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Index, Numeric, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class Expense(Base):
    """Household expense entry."""

    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    description = Column(String(500), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    category = Column(String(50), nullable=False, default="other")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="expenses")

    __table_args__ = (
        Index("idx_expenses_user_id", "user_id"),
        Index("idx_expenses_date", "date"),
    )
