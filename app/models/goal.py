from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Numeric, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class Goal(Base):
    """Savings goal with a running balance."""

    __tablename__ = "goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="goals")

    __table_args__ = (Index("idx_goals_user_id", "user_id"),)

    @property
    def progress_percent(self) -> float:
        """Share of the target reached, capped at 100."""
        if not self.target_amount:
            return 0.0
        percent = float(self.current_amount or 0) / float(self.target_amount) * 100
        return round(min(percent, 100.0), 1)
