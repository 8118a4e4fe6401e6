"""
Dashboard resolvers.
Stats and upcoming events come from the injected dashboard service.
"""

import logging

from citro.config import get_settings
from citro.core.exceptions import ServiceUnavailableException
from citro.core.models import ResolveResult
from citro.resolvers.registry import Resolver, ResolverRegistry, ResolveRequest
from citro.voice.intent_dataset import IntentId

logger = logging.getLogger(__name__)

settings = get_settings()


async def stats_handler(request: ResolveRequest) -> ResolveResult:
    try:
        stats = await request.registry.dashboard_service.get_stats()
    except Exception as e:
        raise ServiceUnavailableException("dashboard", "Could not fetch stats", str(e)) from e

    return ResolveResult.ok(stats, request.current_page)


async def upcoming_events_handler(request: ResolveRequest) -> ResolveResult:
    try:
        events = await request.registry.dashboard_service.get_upcoming_events(
            limit=settings.UPCOMING_EVENTS_LIMIT
        )
    except Exception as e:
        raise ServiceUnavailableException("dashboard", "Could not fetch events", str(e)) from e

    return ResolveResult.ok(events or [], request.current_page)


def register_dashboard_resolvers(registry: ResolverRegistry):
    """Register the dashboard-backed resolvers."""

    registry.register(Resolver(
        name="dashboard_stats",
        handler=stats_handler,
        intents=[IntentId.QUERY_STATS]
    ))

    registry.register(Resolver(
        name="upcoming_events",
        handler=upcoming_events_handler,
        intents=[IntentId.QUERY_UPCOMING_EVENTS]
    ))

    logger.info("Dashboard resolvers registered")
