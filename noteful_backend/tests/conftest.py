import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# The database module reads DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")

from noteful_backend.api.main import app  # noqa: E402
from noteful_database.db import get_db  # noqa: E402
from noteful_database.models import Base  # noqa: E402


@pytest.fixture(scope="session")
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"


@pytest.fixture(scope="session")
def engine(sqlite_url):
    """Fixture for a persistent in-memory SQLite engine for the test session."""
    return create_engine(
        sqlite_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )


@pytest.fixture
def tables(engine):
    """Create fresh tables for each test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine, tables):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """Fixture for FastAPI TestClient with test DB dependency override."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {
        "username": "alice",
        "password": "alicepassword123",
        "fullname": "Alice Example",
    }


@pytest.fixture
def second_user_data():
    """Returns a second user's data."""
    return {
        "username": "bob",
        "password": "bobpassword456",
        "fullname": "Bob Example",
    }


def register_and_auth(client, username, password, fullname=None):
    """Helper for registering then logging in to get JWT token."""
    r1 = client.post("/api/users", json={
        "username": username, "password": password, "fullname": fullname
    })
    assert r1.status_code in (201, 400)

    r2 = client.post("/api/login", data={
        "username": username, "password": password
    })
    assert r2.status_code == 200
    return r2.json()["access_token"]


@pytest.fixture
def auth_header(client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for default user."""
    token = register_and_auth(client, user_data["username"], user_data["password"], user_data["fullname"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns auth header for second user."""
    token = register_and_auth(
        client, second_user_data["username"], second_user_data["password"], second_user_data["fullname"]
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_folder(client):
    def _make(headers, name):
        r = client.post("/api/folders", json={"name": name}, headers=headers)
        assert r.status_code == 201
        return r.json()
    return _make


@pytest.fixture
def make_tag(client):
    def _make(headers, name):
        r = client.post("/api/tags", json={"name": name}, headers=headers)
        assert r.status_code == 201
        return r.json()
    return _make
