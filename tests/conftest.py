"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from blogpad.config import Settings
from blogpad.database import Base, Database
from blogpad.main import create_app


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use TEST_DATABASE_URL when given (e.g. PostgreSQL in Docker), SQLite otherwise
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

database = Database(SQLALCHEMY_DATABASE_URL)
test_settings = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    environment="test",
    auto_create_tables=False,
)
app = create_app(test_settings, database)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from blogpad import models  # noqa: F401

    Base.metadata.drop_all(bind=database.engine)
    Base.metadata.create_all(bind=database.engine)
    yield
    database.dispose()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = database.session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client():
    """Create a test client bound to the test database."""
    with TestClient(app) as test_client:
        yield test_client


def register(client, name: str, email: str, password: str) -> AuthHeaders:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "Ann", "ann@example.com", "secret1")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register(client, "Bob", "bob@example.com", "secret2")


@pytest.fixture
def create_blog(client):
    """Factory that saves a draft (or publishes) through the API."""

    def _create(headers, title="Hello", content="Body text", tags=None, publish=False):
        path = "/api/blogs/publish" if publish else "/api/blogs/save-draft"
        response = client.post(
            path,
            headers=headers,
            json={"title": title, "content": content, "tags": tags or []},
        )
        assert response.status_code == 201
        return response.json()

    return _create


@pytest.fixture
def lenient_client():
    """Test client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def asgi_transport():
    """httpx transport that calls the test app in-process."""
    import httpx

    return httpx.ASGITransport(app=app)


@pytest.fixture
def build_app():
    """Factory for an app over the test database with overridden settings."""

    def _build(**overrides):
        settings = test_settings.model_copy(update=overrides)
        return create_app(settings, database)

    return _build
