"""
Event Repository.
Data access layer for bookable events.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, or_

from citro.core.exceptions import RecordNotFoundException
from citro.db.database import get_db
from citro.db.models import Event

logger = logging.getLogger(__name__)


def event_to_row(event: Event) -> Dict[str, Any]:
    """Flatten an Event into the row shape the resolvers and UI consume."""
    return {
        "id": event.id,
        "title": event.name,
        "tagline": event.tagline,
        "venue": event.venue,
        "start_time": event.start_time,
        "end_time": event.end_time,
        "ticket_price": event.ticket_price,
        "seats": event.max_tickets,
        "registered": event.registered,
        "prize": event.prize,
        "tags": event.tags or [],
        "images": event.images or [],
        "status": event.status,
        "featured": bool(event.featured),
        "dept": event.department.code if event.department else None,
    }


class EventRepository:
    """Repository for event data operations."""

    async def get_published_events(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[Dict[str, Any]]:
        """
        Published, public events, newest first.
        Optional search matches name, tagline or venue.
        """
        async with get_db() as db:
            stmt = select(Event).where(
                Event.status == "published",
                Event.visibility == "public"
            )

            if search and search.strip():
                search_term = f"%{search.strip()}%"
                stmt = stmt.where(
                    or_(
                        Event.name.ilike(search_term),
                        Event.tagline.ilike(search_term),
                        Event.venue.ilike(search_term)
                    )
                )

            stmt = stmt.order_by(Event.start_time.desc()).limit(limit).offset(offset)

            result = await db.execute(stmt)
            return [event_to_row(e) for e in result.scalars().all()]

    async def get_by_id(self, event_id: int) -> Dict[str, Any]:
        """Get one event row by ID."""
        async with get_db() as db:
            result = await db.execute(
                select(Event).where(Event.id == event_id)
            )
            event = result.scalar_one_or_none()
            if event is None:
                raise RecordNotFoundException("Event", str(event_id))
            return event_to_row(event)
