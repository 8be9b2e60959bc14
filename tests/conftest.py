"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storerate.database import Base, get_db
from storerate.main import app
from storerate.models.enums import Role
from storerate.models.store import Store
from storerate.models.user import User
from storerate.services.auth import create_access_token, get_password_hash

TEST_PASSWORD = "Testpass@123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/storerate", "/storerate_test")
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
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.drop_all(bind=engine)
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


def headers_for(user: User) -> AuthHeaders:
    """Bearer headers for an existing user."""
    token = create_access_token(user)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)


@pytest.fixture
def create_user(db):
    """Factory that inserts a user directly."""

    def _create(
        email: str,
        role: Role = Role.USER,
        store_id: int | None = None,
        name: str = "Generated Test User Account",
        address: str | None = None,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(TEST_PASSWORD),
            address=address,
            role=role,
            store_id=store_id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create


@pytest.fixture
def create_store(db):
    """Factory that inserts a store directly."""

    def _create(
        name: str = "Generated Test Store Name",
        email: str | None = None,
        address: str = "1 Test Street, Testville",
    ) -> Store:
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        store = Store(name=name, email=email, address=address)
        db.add(store)
        db.commit()
        db.refresh(store)
        return store

    return _create


@pytest.fixture
def auth_headers(client):
    """Sign up a regular user through the API and return auth headers."""
    response = client.post(
        "/auth/signup",
        json={
            "name": "Regular Test User Account",
            "email": "test@example.com",
            "password": TEST_PASSWORD,
            "address": "42 Test Lane",
        },
    )
    assert response.status_code == 201
    data = response.json()["data"]

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def admin_headers(create_user):
    """Auth headers for an admin account."""
    admin = create_user("admin@example.com", role=Role.ADMIN, name="Platform Admin Test Account")
    return headers_for(admin)


@pytest.fixture
def store(create_store):
    """A store with no ratings."""
    return create_store(name="Corner Street Grocery Market", email="grocery@example.com")


@pytest.fixture
def owner_headers(create_user, store):
    """Auth headers for the owner of ``store``."""
    owner = create_user(
        "owner@example.com", role=Role.STORE_OWNER, store_id=store.id, name="Store Owner Test Account"
    )
    return headers_for(owner)
