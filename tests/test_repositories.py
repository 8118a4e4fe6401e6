"""Tests for the database layer and seeding."""

from datetime import datetime

import pytest

from citro.core.exceptions import DatabaseNotInitializedException, RecordNotFoundException
from citro.db.database import get_db
from citro.db.models import Registration
from citro.db.repositories import DashboardRepository, EventRepository
from citro.db.seed import knowledge_event_to_row, seed_knowledge_base
from citro.resolvers import build_registry
from citro.voice.event_knowledge import EVENTS
from citro.voice.intent_dataset import IntentId


class TestSeed:
    """Tests for seeding from the knowledge base."""

    def test_row_times(self):
        """Start and end times land on the right fest days."""
        soccer = next(e for e in EVENTS if e.name == "ROBO Soccer")
        row = knowledge_event_to_row(soccer)
        assert row["start_time"] == datetime(2026, 4, 8, 12, 0)
        assert row["end_time"] == datetime(2026, 4, 9, 16, 0)
        assert row["ticket_price"] == 500.0
        assert row["max_tickets"] == 15

    @pytest.mark.asyncio
    async def test_seed_once(self, db):
        """Seeding inserts every event and is skipped the second time."""
        assert await seed_knowledge_base() == len(EVENTS)
        assert await seed_knowledge_base() == 0


class TestEventRepository:
    """Tests for EventRepository."""

    @pytest.mark.asyncio
    async def test_search(self, db):
        """Search matches on the event name."""
        await seed_knowledge_base()
        rows = await EventRepository().get_published_events(search="master chef", limit=5)
        assert [r["title"] for r in rows] == ["Master Chef"]
        assert rows[0]["dept"] == "CDIPS"
        assert rows[0]["seats"] == 30

    @pytest.mark.asyncio
    async def test_limit(self, db):
        """The limit caps the number of rows."""
        await seed_knowledge_base()
        rows = await EventRepository().get_published_events(limit=3)
        assert len(rows) == 3

    @pytest.mark.asyncio
    async def test_get_by_id(self, db):
        """Rows can be fetched by id; unknown ids raise."""
        await seed_knowledge_base()
        repo = EventRepository()
        first = (await repo.get_published_events(search="codeology"))[0]
        assert (await repo.get_by_id(first["id"]))["title"] == "Codeology"
        with pytest.raises(RecordNotFoundException):
            await repo.get_by_id(99999)


class TestDashboardRepository:
    """Tests for DashboardRepository."""

    @pytest.mark.asyncio
    async def test_empty_stats(self, db):
        """Empty tables report zeros."""
        stats = await DashboardRepository().get_stats()
        assert stats == {
            "total_events": 0,
            "active_events": 0,
            "total_registrations": 0,
            "tickets_sold": 0,
            "total_revenue": 0.0,
        }

    @pytest.mark.asyncio
    async def test_stats_count_paid_tickets(self, db):
        """Tickets sold and revenue only count paid registrations."""
        await seed_knowledge_base()
        event_id = (await EventRepository().get_published_events(search="codeology"))[0]["id"]
        async with get_db() as session:
            session.add(Registration(user_id="u1", event_id=event_id, quantity=2,
                                     amount_paid=200.0, payment_status="paid"))
            session.add(Registration(user_id="u2", event_id=event_id, quantity=1,
                                     amount_paid=0.0, payment_status="pending"))

        stats = await DashboardRepository().get_stats()
        assert stats["total_events"] == len(EVENTS)
        assert stats["total_registrations"] == 2
        assert stats["tickets_sold"] == 2
        assert stats["total_revenue"] == 200.0

    @pytest.mark.asyncio
    async def test_upcoming(self, db):
        """Upcoming events are ordered by start time."""
        await seed_knowledge_base()
        events = await DashboardRepository().get_upcoming_events(limit=4, now=datetime(2026, 1, 1))
        assert len(events) == 4
        dates = [e["event_date"] for e in events]
        assert dates == sorted(dates)
        assert all(e["registrations_count"] == 0 for e in events)

    @pytest.mark.asyncio
    async def test_upcoming_after_fest(self, db):
        """Nothing is upcoming once the fest is over."""
        await seed_knowledge_base()
        assert await DashboardRepository().get_upcoming_events(now=datetime(2026, 5, 1)) == []


class TestDatabaseBackedResolvers:
    """Resolvers wired to the real repositories."""

    @pytest.mark.asyncio
    async def test_add_to_cart_from_seed(self, db):
        """The cart resolver reconciles with a seeded row."""
        await seed_knowledge_base()
        registry = build_registry()
        result = await registry.resolve(IntentId.ADD_TO_CART, {"name": "robo soccer"})
        assert result.success is True
        assert result.data["cartItem"]["title"] == "ROBO Soccer"
        assert result.data["cartItem"]["available"] == 15

    @pytest.mark.asyncio
    async def test_venue_name_is_not_an_event(self, db):
        """Naming a venue does not add whichever event is held there."""
        await seed_knowledge_base()
        registry = build_registry()
        result = await registry.resolve(IntentId.ADD_TO_CART, {"name": "lawn"})
        assert result.success is False
        assert "cartItem" not in (result.data or {})

    @pytest.mark.asyncio
    async def test_sold_out_from_seed(self, db):
        """A seeded full event is reported sold out."""
        await seed_knowledge_base(registered={"Master Chef": 30})
        registry = build_registry()
        result = await registry.resolve(IntentId.ADD_TO_CART, {"name": "master chef"})
        assert result.success is False
        assert result.data["soldOut"] is True


@pytest.mark.asyncio
async def test_get_db_requires_init():
    """Sessions cannot be opened before init_db()."""
    with pytest.raises(DatabaseNotInitializedException):
        async with get_db():
            pass
