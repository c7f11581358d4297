"""Abstract base class for authentication providers."""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from app.models.user import User


class AuthProvider(ABC):
    """
    Abstract authentication provider interface.

    The provider is the only source of the caller's identity; every
    partnership and ownership check trusts the user it returns.
    """

    @abstractmethod
    async def authenticate(self, db: DBSession, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns User if credentials are valid, None otherwise.
        """
        pass

    @abstractmethod
    async def create_user(
        self,
        db: DBSession,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> User:
        """
        Create a new user (and their profile) with the given credentials.

        Returns the created User.
        """
        pass

    @abstractmethod
    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        """
        Extract and validate user from request (session cookie, token, etc).

        Returns User if authenticated, None otherwise.
        """
        pass

    @abstractmethod
    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        """
        Create a new session for the user.

        Returns the session token to be stored in cookie.
        """
        pass

    @abstractmethod
    async def revoke_session(self, db: DBSession, token: str) -> bool:
        """
        Revoke/invalidate a session by its token.

        Returns True if session was revoked, False if not found.
        """
        pass

    @abstractmethod
    async def revoke_all_sessions(self, db: DBSession, user_id: UUID, except_token: Optional[str] = None) -> int:
        """
        Revoke all sessions for a user, optionally excluding current session.

        Returns count of sessions revoked.
        """
        pass

    @abstractmethod
    async def change_password(
        self,
        db: DBSession,
        user: User,
        current_password: str,
        new_password: str
    ) -> bool:
        """
        Change user's password.

        Validates current password before changing.
        Returns True if successful, False if current password incorrect.
        """
        pass
