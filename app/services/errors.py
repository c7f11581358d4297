"""
Domain errors raised by the service layer.

Each error carries a short human-readable message and the HTTP status the
API should answer with. Routes do not catch these; ``app.main`` registers a
single handler that turns them into JSON responses.
"""


class DomainError(Exception):
    """Base class for user-facing service errors."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Input rejected before any write."""

    status_code = 400
    default_message = "Invalid input"


class NotFound(DomainError):
    """Referenced row or account does not exist (or is not visible)."""

    status_code = 404
    default_message = "Not found"


class Forbidden(DomainError):
    """Caller is not allowed to perform this action."""

    status_code = 403
    default_message = "You are not allowed to do this"


class PartnershipError(DomainError):
    """Base class for partnership lifecycle errors."""

    status_code = 409
    default_message = "Partnership request could not be processed"


class SelfInvite(PartnershipError):
    status_code = 400
    default_message = "You cannot invite yourself"


class AlreadyPartnered(PartnershipError):
    default_message = "One of you already has an active partnership or pending invitation"


class AmbiguousEmail(PartnershipError):
    default_message = "More than one account matches this email"


class AlreadyResponded(PartnershipError):
    default_message = "This invitation has already been answered"


class InvalidTransition(PartnershipError):
    default_message = "This action is not possible in the current partnership state"


class Conflict(DomainError):
    """Request conflicts with existing data."""

    status_code = 409
    default_message = "Already exists"
