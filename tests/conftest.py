"""
Test configuration and fixtures for Bookshelf API tests.
"""
import os

# Settings are chosen at import time
os.environ["ENVIRONMENT"] = "testing"

import sqlite3
from datetime import datetime, timezone
from typing import Dict, Generator, List

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.core.auth import RequestContext, create_access_token
from bookshelf.core.database import Base, get_db
from bookshelf.core.events import QUERIES_INVALIDATED, EventSystem
from bookshelf.main import app
from bookshelf.models.book import Book
from bookshelf.models.user_book import ReadingStatus
from bookshelf.schemas.book import BookCreate
from bookshelf.services.catalog import CatalogService

# Use in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine with foreign key support enabled
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={
        "check_same_thread": False,
    },
    poolclass=StaticPool,
    echo=False,
)


# Add event listener to enable foreign keys for each connection
@event.listens_for(Engine, "connect")
def enable_sqlite_fks(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"

# A fixed clock for everything time dependent
T0 = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2024, 4, 2, 21, 30, tzinfo=timezone.utc)
T2 = datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        # Drop tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(db_session):
    """Create an async test client."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        base_url="http://test", transport=httpx.ASGITransport(app=app)
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(user_id=USER_ID)


@pytest.fixture
def other_ctx() -> RequestContext:
    return RequestContext(user_id=OTHER_USER_ID)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Bearer headers for the main test user."""
    return {"Authorization": f"Bearer {create_access_token(USER_ID)}"}


@pytest.fixture
def other_auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(OTHER_USER_ID)}"}


@pytest.fixture
def catalog() -> CatalogService:
    return CatalogService(clock=lambda: T0)


@pytest.fixture
def test_book(db_session, ctx, catalog) -> Book:
    """A want-to-read book with no sessions."""
    return catalog.add_book(
        db_session,
        ctx,
        BookCreate(
            title="The Left Hand of Darkness",
            author="Ursula K. Le Guin",
            author_nationality="us",
            page_count=304,
            genre="Science Fiction",
            cover_url="https://covers.example/left-hand.jpg",
        ),
    )


@pytest.fixture
def completed_book(db_session, ctx, catalog) -> Book:
    """A book added as already read, rated 4."""
    return catalog.add_book(
        db_session,
        ctx,
        BookCreate(
            title="Piranesi",
            author="Susanna Clarke",
            page_count=272,
            genre="Fantasy",
            status=ReadingStatus.COMPLETED,
            rating=4,
        ),
    )


@pytest.fixture
def other_users_book(db_session, other_ctx, catalog) -> Book:
    return catalog.add_book(
        db_session,
        other_ctx,
        BookCreate(title="Someone Else's Book", author="Another Author", page_count=100),
    )


@pytest.fixture
def published_events() -> Generator[List[dict], None, None]:
    """Collect every query invalidation published during the test."""
    received: List[dict] = []

    def on_invalidated(**kwargs):
        received.append(kwargs)

    EventSystem.subscribe(QUERIES_INVALIDATED, on_invalidated)
    yield received
    EventSystem.clear()
