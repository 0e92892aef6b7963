"""Pytest fixtures and configuration for cadastro-usuarios tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from cadastro_usuarios.database.database import Base
from cadastro_usuarios.database import models  # noqa: F401
from cadastro_usuarios.database.user_repository import UserRepository
from cadastro_usuarios.models.user import UserIn


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine, created fresh for each test.

    StaticPool keeps the single in-memory connection alive across sessions
    and threads.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def sample_user_base():
    """Base user payload that tests can override."""
    return {
        "email": "ana@example.com",
        "name": "Ana",
        "age": 30,
    }


@pytest.fixture
def sample_user_in(sample_user_base):
    return UserIn(**sample_user_base)


@pytest.fixture
def app(engine):
    """FastAPI application bound to the test engine."""
    from cadastro_usuarios.api.app import create_app
    return create_app(engine)


@pytest.fixture
def test_client(app):
    """Create a FastAPI test client around the test application."""
    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
