"""Pytest configuration and fixtures."""

import os

# Cheap hashes in tests; must be set before the app reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

import socialapi.services.realtime as realtime_module  # noqa: E402
from socialapi.config import get_settings  # noqa: E402
from socialapi.database import Base, get_db  # noqa: E402
from socialapi.main import app  # noqa: E402

TEST_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/social_feed", "/social_feed_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(autouse=True)
def published():
    """Replace the Redis publisher so broadcasts can be asserted on."""
    mock_redis = MagicMock()
    realtime_module._sync_redis = mock_redis
    yield mock_redis
    realtime_module._sync_redis = None


@pytest.fixture(autouse=True)
def images_dir(tmp_path, monkeypatch):
    """Store uploaded images in a per-test directory."""
    directory = tmp_path / "images"
    monkeypatch.setattr(get_settings(), "images_dir", str(directory))
    return directory


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, email: str, name: str) -> AuthHeaders:
    """Sign up a user, log in and return bearer headers."""
    response = client.post(
        "/signup", json={"email": email, "name": name, "password": TEST_PASSWORD}
    )
    assert response.status_code == 201
    user_id = response.json()["userId"]

    response = client.post("/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second user, for ownership checks."""
    return register_and_login(client, "other@example.com", "Other User")


@pytest.fixture
def create_post(client):
    """Factory creating a post through the REST API."""

    def _create(headers, title="A fine title", content="Some fine content", filename="pic.png"):
        response = client.post(
            "/feed/post",
            headers=headers,
            data={"title": title, "content": content},
            files={"image": (filename, b"fake image bytes", "image/png")},
        )
        assert response.status_code == 201, response.json()
        return response.json()["post"]

    return _create
