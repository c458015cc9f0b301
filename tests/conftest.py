"""
Shared pytest fixtures for the planner tests.

Every test gets a fresh in-memory SQLite database (aiosqlite) with foreign
keys switched on, so FK and CHECK violations behave like they do on
PostgreSQL. The notification dispatcher is a MagicMock unless a test
builds a real one.
"""
import os

# Configure before any app module reads settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("REDIS_URL", None)
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from datetime import datetime
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers tables
from app.core.database import Base
from app.core.validation import PayloadValidator
from app.repositories.planner_store import PlannerStore
from app.services.notifications.dispatcher import NotificationDispatcher


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session):
    return PlannerStore(session)


@pytest.fixture
def validator():
    return PayloadValidator()


@pytest.fixture
def dispatcher():
    return MagicMock(spec=NotificationDispatcher)


def make_trip_payload(**overrides) -> Dict[str, Any]:
    """Valid trip creation payload for Lisbon with two invitees."""
    payload = {
        "destination": "Lisbon",
        "starts_at": datetime(2024, 6, 1),
        "ends_at": datetime(2024, 6, 10),
        "owner_name": "Jane Doe",
        "owner_email": "jane.doe@example.com",
        "emails_to_invite": ["ana@example.com", "bruno@example.com"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def trip_payload():
    return make_trip_payload
