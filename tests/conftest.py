"""
Shared test fixtures.

Every test gets a fresh in-memory ledger: tables are created
before the test and dropped after, so no state leaks between
tests.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from banking_ledger.main import app
from banking_ledger.models.base import Base, get_db, make_engine


# In-memory SQLite pinned to one connection, same as the app default
engine = make_engine("sqlite://")

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client bound to the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the process-wide ledger.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
