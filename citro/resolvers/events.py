"""
Event resolvers.
Knowledge-base lookups for event, department, day and fest questions.
"""

import logging
import re
from typing import Optional

from citro.config import get_settings
from citro.core.exceptions import EntityNotFoundException
from citro.core.models import ResolveResult
from citro.resolvers.registry import Resolver, ResolverRegistry, ResolveRequest
from citro.voice.event_knowledge import (
    FEST_INFO,
    KnowledgeEvent,
    find_event,
    get_day_label,
    get_department_code,
    get_events_by_day,
    get_events_by_department,
)
from citro.voice.intent_dataset import IntentId

logger = logging.getLogger(__name__)

settings = get_settings()

# Ordinals and calendar dates share one table: "9" means day 2 (April 9).
DAY_PATTERNS = (
    (1, re.compile(r"\b(1|1st|one|first|8|8th|eighth)\b")),
    (2, re.compile(r"\b(2|2nd|two|second|9|9th|ninth)\b")),
    (3, re.compile(r"\b(3|3rd|three|third|10|10th|tenth)\b")),
)


def parse_day(text: Optional[str]) -> Optional[int]:
    """Pull a fest day number (1-3) out of free text."""
    if not text:
        return None
    text = text.lower()
    for day, pattern in DAY_PATTERNS:
        if pattern.search(text):
            return day
    return None


def lookup_event(name: Optional[str]) -> KnowledgeEvent:
    """Knowledge-base event for a spoken name, or EntityNotFoundException."""
    if not name:
        raise EntityNotFoundException(
            "Which event? Try saying the full event name!",
            entity_type="event"
        )

    match = find_event(name, min_confidence=settings.KB_MATCH_MIN_CONFIDENCE)
    if match is None:
        raise EntityNotFoundException(
            f"I couldn't find an event called \"{name}\". Try saying the full event name!",
            entity_type="event",
            query=name
        )

    logger.debug(f"Matched '{name}' -> {match.event.name} ({match.confidence:.2f})")
    return match.event


async def event_lookup_handler(request: ResolveRequest) -> ResolveResult:
    event = lookup_event(request.name)
    return ResolveResult.ok({"event": event}, request.current_page)


async def department_events_handler(request: ResolveRequest) -> ResolveResult:
    name = request.name
    code = get_department_code(name)
    if code is None:
        raise EntityNotFoundException(
            f"I don't know a department called \"{name or ''}\". Try CSE, ECE, MBA or Pharmacy!",
            entity_type="department",
            query=name
        )

    return ResolveResult.ok(
        {"department": code, "events": get_events_by_department(code)},
        request.current_page
    )


async def day_events_handler(request: ResolveRequest) -> ResolveResult:
    day = parse_day(request.name) or parse_day(request.context.transcript)
    if day is None:
        raise EntityNotFoundException(
            "Which day? Citronics runs on Day 1, Day 2 and Day 3 (April 8-10).",
            entity_type="day",
            query=request.name
        )

    return ResolveResult.ok(
        {"day": day, "label": get_day_label(day), "events": get_events_by_day(day)},
        request.current_page
    )


async def search_event_handler(request: ResolveRequest) -> ResolveResult:
    name = request.name
    match = find_event(name) if name else None
    data = {"event": match.event} if match else None
    return ResolveResult.ok(
        data,
        request.current_page,
        message=f"Searching for \"{name or 'unknown'}\""
    )


async def register_event_handler(request: ResolveRequest) -> ResolveResult:
    name = request.name
    match = find_event(name) if name else None
    data = {"event": match.event} if match else None
    return ResolveResult.ok(
        data,
        request.current_page,
        message=f"Registration flow for \"{name or 'unknown'}\""
    )


async def fest_info_handler(request: ResolveRequest) -> ResolveResult:
    return ResolveResult.ok({"fest": dict(FEST_INFO)}, request.current_page)


def register_event_resolvers(registry: ResolverRegistry):
    """Register all knowledge-base event resolvers."""

    registry.register(Resolver(
        name="event_lookup",
        handler=event_lookup_handler,
        intents=[
            IntentId.NAV_EVENT,
            IntentId.EVENT_DETAILS,
            IntentId.EVENT_WHEN,
            IntentId.EVENT_WHERE,
            IntentId.EVENT_PRICE,
            IntentId.EVENT_PRIZE,
        ]
    ))

    registry.register(Resolver(
        name="department_events",
        handler=department_events_handler,
        intents=[IntentId.DEPT_EVENTS]
    ))

    registry.register(Resolver(
        name="day_events",
        handler=day_events_handler,
        intents=[IntentId.DAY_EVENTS]
    ))

    registry.register(Resolver(
        name="search_event",
        handler=search_event_handler,
        intents=[IntentId.SEARCH_EVENT]
    ))

    registry.register(Resolver(
        name="register_event",
        handler=register_event_handler,
        intents=[IntentId.REGISTER_EVENT]
    ))

    registry.register(Resolver(
        name="fest_info",
        handler=fest_info_handler,
        intents=[IntentId.FEST_INFO]
    ))

    logger.info("Event resolvers registered")
