"""
Dashboard Repository.
Headline KPIs and the upcoming-events widget.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func

from citro.db.database import get_db
from citro.db.models import Event, Registration

logger = logging.getLogger(__name__)


class DashboardRepository:
    """Repository for dashboard queries."""

    async def get_stats(self) -> Dict[str, Any]:
        """Overview KPIs; every figure falls back to 0 on empty tables."""
        async with get_db() as db:
            total_events = await db.scalar(select(func.count(Event.id)))
            active_events = await db.scalar(
                select(func.count(Event.id)).where(Event.status == "published")
            )
            total_registrations = await db.scalar(select(func.count(Registration.id)))
            tickets_sold = await db.scalar(
                select(func.coalesce(func.sum(Registration.quantity), 0))
                .where(Registration.payment_status == "paid")
            )
            total_revenue = await db.scalar(
                select(func.coalesce(func.sum(Registration.amount_paid), 0))
                .where(Registration.payment_status == "paid")
            )

            return {
                "total_events": total_events or 0,
                "active_events": active_events or 0,
                "total_registrations": total_registrations or 0,
                "tickets_sold": int(tickets_sold or 0),
                "total_revenue": float(total_revenue or 0),
            }

    async def get_upcoming_events(
        self,
        limit: int = 5,
        now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Next published events, earliest first, with registration counts."""
        now = now or datetime.utcnow()

        async with get_db() as db:
            stmt = (
                select(Event, func.count(Registration.id).label("registrations_count"))
                .outerjoin(Registration, Registration.event_id == Event.id)
                .where(Event.status == "published", Event.start_time >= now)
                .group_by(Event.id)
                .order_by(Event.start_time.asc())
                .limit(limit)
            )
            result = await db.execute(stmt)

            return [
                {
                    "id": event.id,
                    "title": event.name,
                    "event_date": event.start_time,
                    "status": event.status,
                    "capacity": event.max_tickets,
                    "venue_name": event.venue or "TBA",
                    "registrations_count": count or 0,
                }
                for event, count in result.all()
            ]
