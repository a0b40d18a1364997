"""Test configuration and fixtures."""

import os
from datetime import datetime

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Set test environment variables BEFORE importing the app
os.environ["ENVIRONMENT"] = "test"

from visit_counter.config import Settings
from visit_counter.counter.clock import FixedClock
from visit_counter.counter.store import VisitStore
from visit_counter.database.connection import DatabaseManager
from visit_counter.database.migrations import create_tables, drop_tables
from visit_counter.main import create_app


@pytest.fixture
def database_path(tmp_path) -> str:
    """Path of a fresh SQLite store file for one test."""
    return str(tmp_path / "visits.db")


@pytest.fixture
def settings(database_path) -> Settings:
    return Settings(
        database_path=database_path,
        environment="test",
        store_timeout=5.0,
    )


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2024-03-15 10:30 local time."""
    return FixedClock(datetime(2024, 3, 15, 10, 30))


@pytest_asyncio.fixture
async def db(settings):
    """Database manager with the visits table created."""
    manager = DatabaseManager.from_settings(settings)
    await create_tables(manager)
    yield manager
    await drop_tables(manager)
    await manager.close()


@pytest.fixture
def store(db) -> VisitStore:
    return VisitStore(db)


@pytest.fixture
def client(settings, clock):
    """Test client running the app lifespan against a temporary store."""
    app = create_app(settings=settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
