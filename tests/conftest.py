"""
Global test configuration and fixtures for Reminders

Environment overrides are applied before the application package is
imported, because settings, the engine and the app are built at import.
"""

import os
import tempfile
from datetime import timedelta
from pathlib import Path

_TEST_DIR = tempfile.mkdtemp(prefix="reminders-tests-")

os.environ.update({
    "ENVIRONMENT": "test",
    "DEV_MODE": "true",
    "SEED_DEMO_USER": "false",
    "DATABASE_URL": f"sqlite:///{Path(_TEST_DIR) / 'app.db'}",
    "SECRET_KEY": "test-secret-key-for-testing-only-0123456789",
    "BCRYPT_ROUNDS": "4",
    "SECURITY_HEADERS_ENABLED": "true",
})

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from reminders.core.config import settings
from reminders.core.limiter import limiter
from reminders.core.security import PasswordHasher
from reminders.core.utils.session_store import SessionStore
from reminders.db.base import Base
from reminders.db.seeds.demo_user import seed_demo_user
from reminders.db.session import get_db
from reminders.main import app
from reminders.repositories.reminders import ReminderRepository
from reminders.repositories.users import UserRepository
from reminders.services.auth import AuthService
from tests.utils.forms import submit_form

DEMO_USERNAME = "tim"
DEMO_PASSWORD = "tim"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """Fresh SQLite database file for each test function"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Provide database session for tests"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def override_get_db(session_factory):
    """Each request gets its own session bound to the test database"""
    def _override():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()
    return _override


@pytest.fixture(scope="function")
def hasher():
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@pytest.fixture(scope="function")
def reminder_repo(db_session):
    return ReminderRepository(db_session)


@pytest.fixture(scope="function")
def user_repo(db_session):
    return UserRepository(db_session)


@pytest.fixture(scope="function")
def session_store(db_session):
    return SessionStore(db_session, lifetime=timedelta(minutes=30))


@pytest.fixture(scope="function")
def auth_service(user_repo, session_store, hasher):
    return AuthService(users=user_repo, sessions=session_store, hasher=hasher)


@pytest.fixture(scope="function")
def demo_user(db_session, hasher):
    """The seeded tim/tim account"""
    return seed_demo_user(db_session, settings, hasher=hasher)


# ============================================================================
# Application Client Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def client(session_factory):
    """Create FastAPI test client"""
    app.dependency_overrides[get_db] = override_get_db(session_factory)
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture(scope="function")
def seeded_client(client, demo_user):
    """Test client with the demo user present but not logged in"""
    return client


@pytest.fixture(scope="function")
def authenticated_client(seeded_client):
    """Test client logged in as the demo user"""
    response = submit_form(
        seeded_client,
        "/login",
        {"username": DEMO_USERNAME, "password": DEMO_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return seeded_client


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def sample_reminder_data():
    return {
        "title": "Buy milk",
        "description": "Semi-skimmed, two litres",
    }
