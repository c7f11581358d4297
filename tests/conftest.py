"""
Test configuration and fixtures for Our Home.

Implements the transaction rollback pattern:
- Session-scoped engine (in-memory SQLite unless TEST_DATABASE_URL is set)
- Function-scoped transactional session with automatic rollback
- TestClient with database dependency override
- Authenticated client fixtures for a user and their partner
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import Partnership, User, Session as UserSession
from app.services.movie_search import get_movie_search_client
from tests.factories import create_partnership, create_session, create_user


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    TEST_DATABASE_URL points the suite at PostgreSQL; otherwise an in-memory
    SQLite database is used. Each test runs in a transaction that is rolled
    back afterwards, so no test data persists.
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


def _make_engine(database_url: str):
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite manages transactions itself and breaks SAVEPOINT; hand control
    # back to SQLAlchemy so nested transactions work
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@pytest.fixture(scope="session")
def test_engine():
    """
    Create test database engine once per session.

    Tables are created at the start and dropped at the end.
    """
    engine = _make_engine(get_test_database_url())
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """
    Provide a transactional database session that rolls back after each test.

    Services call ``commit()``; with ``create_savepoint`` those commits only
    release a savepoint inside the outer transaction, and a service-level
    ``rollback()`` only undoes its own savepoint.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    session = Session(bind=connection, join_transaction_mode="create_savepoint")

    yield session

    session.close()
    transaction.rollback()
    connection.close()


# =============================================================================
# TestClient Fixtures
# =============================================================================


def _client_for(db: Session, token: str | None = None) -> TestClient:
    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db

    test_client = TestClient(app)
    if token:
        test_client.cookies.set(settings.session_cookie_name, token)
    # Set default Referer so CSRF Origin middleware allows requests
    test_client.headers["referer"] = "http://testserver/"
    return test_client


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Anonymous TestClient with database dependency override."""
    with _client_for(db) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a test user with a profile."""
    return create_user(db, email="testuser@example.com", full_name="Alice")


@pytest.fixture
def partner_user(db: Session) -> User:
    """A second user, not paired with anyone until a test pairs them."""
    return create_user(db, email="partner@example.com", full_name="Bob")


@pytest.fixture
def outsider_user(db: Session) -> User:
    """A user outside the test household."""
    return create_user(db, email="outsider@example.com", full_name="Eve")


@pytest.fixture
def test_session(db: Session, test_user: User) -> UserSession:
    """Create a test session for the test user."""
    return create_session(db, test_user)


@pytest.fixture
def partnership(db: Session, test_user: User, partner_user: User) -> Partnership:
    """Accepted partnership between test_user and partner_user."""
    return create_partnership(db, test_user, partner_user, status="accepted")


@pytest.fixture
def auth_client(
    db: Session, test_session: UserSession
) -> Generator[TestClient, None, None]:
    """
    Authenticated TestClient for the test user.

    Creates a separate TestClient instance to avoid cookie conflicts.
    """
    with _client_for(db, test_session.token) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def partner_client(
    db: Session, partner_user: User
) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for partner_user."""
    session = create_session(db, partner_user)
    with _client_for(db, session.token) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def outsider_client(
    db: Session, outsider_user: User
) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for outsider_user."""
    session = create_session(db, outsider_user)
    with _client_for(db, session.token) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Mock Fixtures
# =============================================================================


class StubMovieSearchClient:
    """Stand-in for the Kinopoisk client; returns canned results."""

    def __init__(self):
        self.results = []
        self.error = None
        self.queries = []

    @property
    def enabled(self) -> bool:
        return True

    def search(self, query: str, limit: int = 5):
        self.queries.append((query, limit))
        if self.error is not None:
            raise self.error
        return self.results[:limit]


@pytest.fixture
def movie_search_stub():
    """Override the movie search dependency for the duration of a test."""
    stub = StubMovieSearchClient()
    app.dependency_overrides[get_movie_search_client] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_movie_search_client, None)


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "security: marks tests as security tests (deselect with '-m not security')",
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
