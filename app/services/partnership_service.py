"""
Partnership lifecycle: invitations, responses and dissolution.

A partnership moves pending -> accepted | rejected, and accepted ->
dissolved. Rejected and dissolved rows are terminal and count as "no
partnership"; pairing again needs a fresh invitation. A user can be part of
at most one active (pending or accepted) partnership at a time.

Every transition is a single row write. Responses and dissolution are
compare-and-set updates on the expected current status, so a repeated or
racing request cannot apply a second effect.
"""

import enum
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.partnership import ACTIVE_STATUSES, Partnership, PartnershipStatus
from app.models.user import User
from app.services.errors import (
    AlreadyPartnered,
    AlreadyResponded,
    AmbiguousEmail,
    Forbidden,
    InvalidTransition,
    NotFound,
    SelfInvite,
    ValidationError,
)

logger = logging.getLogger(__name__)


class HouseholdState(str, enum.Enum):
    """Partnership state as seen by one user."""
    NONE = "none"
    PENDING_SENT = "pending_sent"
    PENDING_RECEIVED = "pending_received"
    ACCEPTED = "accepted"
    TERMINATED = "terminated"  # only rejected/dissolved rows; behaves like NONE


def canonical_pair(first: UUID, second: UUID) -> Tuple[UUID, UUID]:
    """Order two user ids so the unordered pair has one representation."""
    if str(first) <= str(second):
        return first, second
    return second, first


def _member_filter(user_id: UUID):
    return or_(Partnership.user_a == user_id, Partnership.user_b == user_id)


class PartnershipService:
    """Service for partnership-related operations."""

    # =========================================================================
    # Lookups
    # =========================================================================

    @staticmethod
    def lookup_user_ids_by_email(db: Session, email: str) -> List[UUID]:
        """Return ids of accounts whose email matches (case-insensitive)."""
        rows = (
            db.query(User.id)
            .filter(func.lower(User.email) == email.strip().lower())
            .limit(2)
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def get_partnership(db: Session, partnership_id: UUID) -> Optional[Partnership]:
        """Get a partnership by ID."""
        return db.query(Partnership).filter(Partnership.id == partnership_id).first()

    @staticmethod
    def get_active(db: Session, user_id: UUID) -> Optional[Partnership]:
        """The user's pending or accepted partnership, if any."""
        return (
            db.query(Partnership)
            .filter(_member_filter(user_id), Partnership.status.in_(ACTIVE_STATUSES))
            .order_by(Partnership.created_at.desc())
            .first()
        )

    @staticmethod
    def get_accepted(db: Session, user_id: UUID) -> Optional[Partnership]:
        return (
            db.query(Partnership)
            .filter(
                _member_filter(user_id),
                Partnership.status == PartnershipStatus.ACCEPTED,
            )
            .first()
        )

    @staticmethod
    def has_other_accepted(db: Session, user_id: UUID, partnership_id: UUID) -> bool:
        """Whether the user is accepted into a partnership other than this one."""
        return (
            db.query(Partnership.id)
            .filter(
                _member_filter(user_id),
                Partnership.status == PartnershipStatus.ACCEPTED,
                Partnership.id != partnership_id,
            )
            .first()
            is not None
        )

    @staticmethod
    def lock_members(db: Session, *user_ids: UUID) -> None:
        """
        Lock both users' rows until the end of the transaction.

        Lifecycle writes touching the same user are serialised, so the
        one-active-partnership check and the write that follows it cannot
        interleave with another request. Rows are locked in id order.
        """
        (
            db.query(User.id)
            .filter(User.id.in_(user_ids))
            .order_by(User.id)
            .with_for_update()
            .all()
        )

    @staticmethod
    def current_partner(db: Session, user_id: UUID) -> Optional[UUID]:
        """Id of the user's accepted partner, or None."""
        partnership = PartnershipService.get_accepted(db, user_id)
        if partnership is None:
            return None
        return partnership.other_member(user_id)

    @staticmethod
    def pending_received(db: Session, user_id: UUID) -> List[Partnership]:
        """Pending invitations waiting for this user's answer."""
        return (
            db.query(Partnership)
            .filter(
                _member_filter(user_id),
                Partnership.status == PartnershipStatus.PENDING,
                Partnership.invited_by != user_id,
            )
            .order_by(Partnership.created_at.desc())
            .all()
        )

    @staticmethod
    def pending_sent(db: Session, user_id: UUID) -> List[Partnership]:
        """Pending invitations this user sent."""
        return (
            db.query(Partnership)
            .filter(
                Partnership.invited_by == user_id,
                Partnership.status == PartnershipStatus.PENDING,
            )
            .order_by(Partnership.created_at.desc())
            .all()
        )

    @staticmethod
    def state_for(db: Session, user_id: UUID) -> HouseholdState:
        """Classify the user's current position in the lifecycle."""
        active = PartnershipService.get_active(db, user_id)
        if active is not None:
            if active.status == PartnershipStatus.ACCEPTED:
                return HouseholdState.ACCEPTED
            if active.invited_by == user_id:
                return HouseholdState.PENDING_SENT
            return HouseholdState.PENDING_RECEIVED

        has_history = (
            db.query(Partnership.id).filter(_member_filter(user_id)).first()
            is not None
        )
        return HouseholdState.TERMINATED if has_history else HouseholdState.NONE

    # =========================================================================
    # Transitions
    # =========================================================================

    @staticmethod
    def invite(db: Session, inviter_id: UUID, invitee_email: str) -> Partnership:
        """
        Send a partnership invitation to the account registered under an email.

        Args:
            db: Database session
            inviter_id: User sending the invitation
            invitee_email: Email of the person to invite

        Returns:
            The new pending Partnership

        Raises:
            ValidationError: email is empty
            NotFound: no account uses this email
            AmbiguousEmail: more than one account matches
            SelfInvite: the email belongs to the inviter
            AlreadyPartnered: either side already has an active partnership
        """
        email = (invitee_email or "").strip().lower()
        if not email:
            raise ValidationError("Email is required")

        matches = PartnershipService.lookup_user_ids_by_email(db, email)
        if not matches:
            raise NotFound("No account found with this email")
        if len(matches) > 1:
            raise AmbiguousEmail()
        invitee_id = matches[0]

        if invitee_id == inviter_id:
            raise SelfInvite()

        PartnershipService.lock_members(db, inviter_id, invitee_id)
        if PartnershipService.get_active(db, inviter_id) is not None:
            raise AlreadyPartnered(
                "You already have a partner or a pending invitation"
            )
        if PartnershipService.get_active(db, invitee_id) is not None:
            raise AlreadyPartnered(
                "This person already has a partner or a pending invitation"
            )

        user_a, user_b = canonical_pair(inviter_id, invitee_id)
        partnership = Partnership(
            user_a=user_a,
            user_b=user_b,
            status=PartnershipStatus.PENDING,
            invited_by=inviter_id,
        )
        db.add(partnership)
        try:
            db.commit()
        except IntegrityError:
            # Concurrent invite for the same pair won the unique index
            db.rollback()
            raise AlreadyPartnered()
        db.refresh(partnership)

        logger.info(
            "Partnership %s invited: inviter=%s invitee=%s",
            partnership.id,
            inviter_id,
            invitee_id,
        )
        return partnership

    @staticmethod
    def respond(
        db: Session, user_id: UUID, partnership_id: UUID, accept: bool
    ) -> Partnership:
        """
        Accept or reject a pending invitation. Only the invitee may respond.

        Answering an invitation that is no longer pending raises
        AlreadyResponded and leaves the row untouched. Accepting while either
        member is already accepted elsewhere raises AlreadyPartnered.
        """
        partnership = PartnershipService.get_partnership(db, partnership_id)
        if partnership is None:
            raise NotFound("Invitation not found")
        if user_id not in partnership.members:
            raise Forbidden("This invitation is not addressed to you")
        if user_id == partnership.invited_by:
            raise Forbidden("Only the invited person can respond to an invitation")
        if partnership.status != PartnershipStatus.PENDING:
            raise AlreadyResponded()

        if accept:
            PartnershipService.lock_members(db, *partnership.members)
            if any(
                PartnershipService.has_other_accepted(db, member, partnership_id)
                for member in partnership.members
            ):
                raise AlreadyPartnered()

        new_status = PartnershipStatus.ACCEPTED if accept else PartnershipStatus.REJECTED
        updated = (
            db.query(Partnership)
            .filter(
                Partnership.id == partnership_id,
                Partnership.status == PartnershipStatus.PENDING,
            )
            .update(
                {
                    Partnership.status: new_status,
                    Partnership.responded_at: datetime.now(timezone.utc),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            raise AlreadyResponded()

        db.commit()
        db.refresh(partnership)

        logger.info(
            "Partnership %s %s by user=%s", partnership.id, new_status.value, user_id
        )
        return partnership

    @staticmethod
    def dissolve(db: Session, user_id: UUID, partnership_id: UUID) -> Partnership:
        """
        End an accepted partnership. Either member may do this unilaterally.

        The row is kept with status ``dissolved``; readers treat it exactly
        like having no partnership.
        """
        partnership = PartnershipService.get_partnership(db, partnership_id)
        if partnership is None:
            raise NotFound("Partnership not found")
        if user_id not in partnership.members:
            raise Forbidden("You are not part of this partnership")
        if partnership.status != PartnershipStatus.ACCEPTED:
            raise InvalidTransition("Only an accepted partnership can be ended")

        updated = (
            db.query(Partnership)
            .filter(
                Partnership.id == partnership_id,
                Partnership.status == PartnershipStatus.ACCEPTED,
            )
            .update(
                {
                    Partnership.status: PartnershipStatus.DISSOLVED,
                    Partnership.dissolved_at: datetime.now(timezone.utc),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            raise InvalidTransition("Only an accepted partnership can be ended")

        db.commit()
        db.refresh(partnership)

        logger.info("Partnership %s dissolved by user=%s", partnership.id, user_id)
        return partnership

    @staticmethod
    def cancel(db: Session, user_id: UUID, partnership_id: UUID) -> bool:
        """
        Withdraw a pending invitation. Only the inviter may do this.

        The row is deleted: it never became a partnership.
        """
        partnership = PartnershipService.get_partnership(db, partnership_id)
        if partnership is None:
            raise NotFound("Invitation not found")
        if user_id != partnership.invited_by:
            raise Forbidden("Only the person who sent the invitation can withdraw it")
        if partnership.status != PartnershipStatus.PENDING:
            raise InvalidTransition("Only a pending invitation can be withdrawn")

        deleted = (
            db.query(Partnership)
            .filter(
                Partnership.id == partnership_id,
                Partnership.status == PartnershipStatus.PENDING,
            )
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            raise AlreadyResponded()

        db.commit()
        db.expunge(partnership)

        logger.info("Partnership %s withdrawn by user=%s", partnership_id, user_id)
        return True


# Singleton instance
partnership_service = PartnershipService()
