"""Shared fixtures for the Citro test suite."""

import os

# Settings are cached on first import, so the test environment goes in first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENABLE_COMMAND_LOG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from citro.db.database import close_db, init_db
from citro.resolvers import build_registry

IN_MEMORY_DB = "sqlite+aiosqlite:///:memory:"


def make_event_row(**overrides):
    """Row shaped like EventRepository.get_published_events output."""
    row = {
        "id": 7,
        "title": "Master Chef",
        "tagline": "CDIPS - April 8, 2026",
        "venue": "CDIPS Entrance",
        "start_time": "2026-04-08T12:00:00",
        "end_time": "2026-04-08T04:00:00",
        "ticket_price": 200.0,
        "seats": 20,
        "registered": 5,
        "prize": None,
        "tags": [],
        "images": ["/images/master-chef.png"],
        "status": "published",
        "featured": False,
        "dept": "CDIPS",
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_row():
    return make_event_row


@pytest.fixture
def dashboard_service():
    service = AsyncMock()
    service.get_stats.return_value = {
        "total_events": 36,
        "active_events": 30,
        "total_registrations": 120,
        "tickets_sold": 95,
        "total_revenue": 19000.0,
    }
    service.get_upcoming_events.return_value = [
        {"id": 1, "title": "Codeology"},
        {"id": 2, "title": "ROBO Soccer"},
        {"id": 3, "title": "Master Chef"},
        {"id": 4, "title": "Youth Parliament"},
        {"id": 5, "title": "Brand Quiz"},
    ]
    return service


@pytest.fixture
def event_service():
    service = AsyncMock()
    service.get_published_events.return_value = [make_event_row()]
    return service


@pytest.fixture
def registry(dashboard_service, event_service):
    return build_registry(dashboard_service=dashboard_service, event_service=event_service)


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database per test."""
    await init_db(IN_MEMORY_DB)
    yield
    await close_db()
