"""Partnership model pairing two user accounts."""

import enum
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Uuid,
    text,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class PartnershipStatus(str, enum.Enum):
    """Lifecycle status of a partnership row."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    DISSOLVED = "dissolved"


ACTIVE_STATUSES = (PartnershipStatus.PENDING, PartnershipStatus.ACCEPTED)

_ACTIVE_WHERE = text("status IN ('pending', 'accepted')")


class Partnership(Base):
    """
    A pairing between exactly two users.

    The pair is stored in canonical order (``str(user_a) < str(user_b)``) so
    the unordered pair has a single representation. Rejected and dissolved
    rows are kept as history and never become active again.
    """

    __tablename__ = "partnerships"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_a = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_b = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        Enum(
            PartnershipStatus,
            name="partnership_status",
            native_enum=False,
            length=16,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=PartnershipStatus.PENDING,
    )
    invited_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    responded_at = Column(DateTime(timezone=True), nullable=True)
    dissolved_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    first_user = relationship("User", foreign_keys=[user_a])
    second_user = relationship("User", foreign_keys=[user_b])
    inviter = relationship("User", foreign_keys=[invited_by])

    __table_args__ = (
        CheckConstraint("user_a <> user_b", name="ck_partnerships_distinct_users"),
        CheckConstraint(
            "invited_by = user_a OR invited_by = user_b",
            name="ck_partnerships_inviter_is_member",
        ),
        Index("idx_partnerships_user_a", "user_a"),
        Index("idx_partnerships_user_b", "user_b"),
        Index(
            "uq_partnerships_active_pair",
            "user_a",
            "user_b",
            unique=True,
            postgresql_where=_ACTIVE_WHERE,
            sqlite_where=_ACTIVE_WHERE,
        ),
    )

    @property
    def members(self) -> tuple:
        return (self.user_a, self.user_b)

    @property
    def invitee(self):
        """The member who did not send the invitation."""
        return self.user_b if self.invited_by == self.user_a else self.user_a

    def other_member(self, user_id):
        return self.user_b if user_id == self.user_a else self.user_a

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def __repr__(self):
        return (
            f"<Partnership(id={self.id}, user_a={self.user_a}, "
            f"user_b={self.user_b}, status={self.status.value})>"
        )
