"""
Seed the event tables from the built-in knowledge base.
"""

import logging
from datetime import datetime, date
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func

from citro.db.database import get_db
from citro.db.models import Department, Event
from citro.voice.event_knowledge import DEPARTMENTS, EVENTS, KnowledgeEvent

logger = logging.getLogger(__name__)

FEST_START = date(2026, 4, 8)


def _at(day: int, clock: str) -> datetime:
    t = datetime.strptime(clock, "%I:%M %p").time()
    return datetime.combine(FEST_START.replace(day=FEST_START.day + day - 1), t)


def knowledge_event_to_row(event: KnowledgeEvent) -> Dict[str, Any]:
    """Column values for a knowledge-base event (department resolved separately)."""
    return {
        "name": event.name,
        "tagline": f"{event.department_name} - {event.date}",
        "venue": event.venue,
        "start_time": _at(event.days[0], event.start_time),
        "end_time": _at(event.days[-1], event.end_time),
        "ticket_price": float(event.price),
        "max_tickets": event.max_tickets,
        "registered": 0,
        "prize": event.prize,
        "tags": list(event.tags),
        "images": [],
        "status": "published",
        "visibility": "public",
    }


async def seed_knowledge_base(registered: Optional[Dict[str, int]] = None) -> int:
    """
    Insert every department and event. Skips seeding when events exist.

    registered maps event names to an initial registered count.
    Returns the number of events inserted.
    """
    registered = registered or {}

    async with get_db() as db:
        existing = await db.scalar(select(func.count(Event.id)))
        if existing:
            logger.info(f"Events table already has {existing} rows, skipping seed")
            return 0

        departments: Dict[str, Department] = {}
        for code, name in DEPARTMENTS.items():
            dept = Department(code=code, name=name)
            db.add(dept)
            departments[code] = dept
        await db.flush()

        events: List[Event] = []
        for kb_event in EVENTS:
            row = knowledge_event_to_row(kb_event)
            row["registered"] = registered.get(kb_event.name, 0)
            event = Event(department_id=departments[kb_event.dept].id, **row)
            db.add(event)
            events.append(event)

    logger.info(f"Seeded {len(departments)} departments and {len(events)} events")
    return len(events)
