"""
Unit tests for AuthService (LocalAuthProvider).

Tests authentication functionality including:
- Password hashing and verification
- User creation (with profile)
- Session management
- Password changes
"""
import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from sqlalchemy.orm import Session

from app.services.auth.local_provider import LocalAuthProvider, local_auth_provider
from app.models import Profile, User, Session as UserSession
from tests.factories import create_user, create_session


def _request(cookies=None):
    request = MagicMock()
    request.cookies = cookies or {}
    request.headers = {"user-agent": "pytest"}
    request.client.host = "127.0.0.1"
    return request


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_bcrypt_hash(self):
        provider = LocalAuthProvider()

        hashed = provider._hash_password("test_password")

        assert hashed != "test_password"
        assert hashed.startswith("$2b$")

    def test_hash_password_is_salted(self):
        provider = LocalAuthProvider()

        assert provider._hash_password("same") != provider._hash_password("same")

    def test_verify_password(self):
        provider = LocalAuthProvider()
        hashed = provider._hash_password("correct_password")

        assert provider._verify_password("correct_password", hashed) is True
        assert provider._verify_password("wrong_password", hashed) is False


class TestUserCreation:
    """Tests for creating accounts."""

    @pytest.mark.asyncio
    async def test_create_user_with_profile(self, db: Session):
        user = await local_auth_provider.create_user(
            db, " New@Example.com ", "password123", full_name=" Dana "
        )

        assert user.email == "new@example.com"
        profile = db.query(Profile).filter(Profile.id == user.id).one()
        assert profile.full_name == "Dana"

    @pytest.mark.asyncio
    async def test_create_user_without_name(self, db: Session):
        user = await local_auth_provider.create_user(db, "noname@example.com", "password123")

        profile = db.query(Profile).filter(Profile.id == user.id).one()
        assert profile.full_name is None


class TestAuthentication:
    """Tests for checking credentials."""

    @pytest.mark.asyncio
    async def test_authenticate_valid(self, db: Session):
        user = create_user(db, email="login@example.com", password="password123")

        result = await local_auth_provider.authenticate(db, "LOGIN@example.com", "password123")

        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, db: Session):
        create_user(db, email="login@example.com", password="password123")

        assert await local_auth_provider.authenticate(db, "login@example.com", "nope") is None

    @pytest.mark.asyncio
    async def test_authenticate_unknown_user(self, db: Session):
        assert await local_auth_provider.authenticate(db, "ghost@example.com", "x") is None


class TestSessions:
    """Tests for session lifecycle."""

    @pytest.mark.asyncio
    async def test_create_session_and_resolve_user(self, db: Session, test_user: User):
        token = await local_auth_provider.create_session(db, test_user, _request())

        from app.config import settings

        request = _request(cookies={settings.session_cookie_name: token})
        user = await local_auth_provider.get_user_from_request(db, request)

        assert user.id == test_user.id

    @pytest.mark.asyncio
    async def test_expired_session_ignored(self, db: Session, test_user: User):
        from app.config import settings

        session = create_session(db, test_user, expires_in=timedelta(days=-1))
        request = _request(cookies={settings.session_cookie_name: session.token})

        assert await local_auth_provider.get_user_from_request(db, request) is None

    @pytest.mark.asyncio
    async def test_no_cookie(self, db: Session):
        assert await local_auth_provider.get_user_from_request(db, _request()) is None

    @pytest.mark.asyncio
    async def test_revoke_session(self, db: Session, test_user: User):
        session = create_session(db, test_user)

        assert await local_auth_provider.revoke_session(db, session.token) is True
        assert await local_auth_provider.revoke_session(db, session.token) is False

    @pytest.mark.asyncio
    async def test_revoke_all_except_current(self, db: Session, test_user: User):
        keep = create_session(db, test_user)
        create_session(db, test_user)
        create_session(db, test_user)

        revoked = await local_auth_provider.revoke_all_sessions(
            db, test_user.id, except_token=keep.token
        )

        assert revoked == 2
        remaining = db.query(UserSession).filter(UserSession.user_id == test_user.id).all()
        assert [s.token for s in remaining] == [keep.token]


class TestChangePassword:
    """Tests for password changes."""

    @pytest.mark.asyncio
    async def test_change_password(self, db: Session):
        user = create_user(db, password="oldpassword1")

        assert await local_auth_provider.change_password(db, user, "oldpassword1", "newpassword1")
        assert await local_auth_provider.authenticate(db, user.email, "newpassword1") is not None

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, db: Session):
        user = create_user(db, password="oldpassword1")

        assert not await local_auth_provider.change_password(db, user, "wrong", "newpassword1")
