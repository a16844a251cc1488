import pytest
from fastapi.testclient import TestClient

from inventory.config import Settings
from inventory.database import Database
from inventory.main import create_app


def make_settings(**overrides) -> Settings:
    """Settings for tests: SQLite in-memory, no static files."""
    values = {
        "DATABASE_URL": "sqlite:///:memory:",
        "STATIC_DIR": "",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh database for each test."""
    app = create_app(make_settings())

    # entering the client runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session():
    """Create database session for direct database access in tests."""
    database = Database("sqlite:///:memory:")
    database.create_tables()
    session = database.SessionLocal()

    yield session

    session.close()
    database.dispose()
