"""
Cart resolvers.

Two-phase lookup: the spoken name is matched against the knowledge base,
then the bookable row is fetched from the event service and reconciled
with it. The UI dispatches the resulting cart item.
"""

import logging
from difflib import SequenceMatcher
from typing import Any, Dict, List, Optional, Tuple

from citro.config import get_settings
from citro.core.exceptions import EntityNotFoundException, ServiceUnavailableException
from citro.core.models import ResolveResult
from citro.resolvers.registry import Resolver, ResolverRegistry, ResolveRequest
from citro.voice.event_knowledge import KnowledgeEvent, find_event
from citro.voice.intent_dataset import IntentId

logger = logging.getLogger(__name__)

settings = get_settings()


def _similarity(a: str, b: str) -> float:
    return SequenceMatcher(None, a.lower().strip(), b.lower().strip()).ratio()


def reconcile_rows(rows: List[Dict[str, Any]], title: str) -> Optional[Dict[str, Any]]:
    """
    Pick the row for an event title: exact first, then the closest one.

    Returns None when no row is similar enough to be the same event.
    """
    wanted = title.lower().strip()
    for row in rows:
        if (row.get("title") or "").lower().strip() == wanted:
            return row

    scored = [(_similarity(row.get("title") or "", title), row) for row in rows]
    best_score, best_row = max(scored, key=lambda pair: pair[0], default=(0.0, None))
    if best_score < settings.EVENT_TITLE_MIN_SIMILARITY:
        return None
    return best_row


def seats_available(row: Dict[str, Any]) -> Optional[int]:
    """Seats left, or None when the event has no capacity limit."""
    seats = row.get("seats")
    if seats is None:
        return None
    registered = row.get("registered") or 0
    return max(0, seats - registered)


def is_sold_out(row: Dict[str, Any]) -> bool:
    available = seats_available(row)
    return available is not None and available <= 0


async def find_bookable_event(
    request: ResolveRequest
) -> Tuple[KnowledgeEvent, Dict[str, Any]]:
    """
    Resolve the spoken name to (knowledge-base event, bookable row).

    The knowledge base names the event; the event service is then searched
    by the canonical name first and by the spoken name second.
    """
    spoken = request.name
    if not spoken:
        raise EntityNotFoundException(
            "Which event should I add? Try saying the full event name!",
            entity_type="event"
        )

    match = find_event(spoken, min_confidence=settings.KB_MATCH_MIN_CONFIDENCE)
    if match is None:
        raise EntityNotFoundException(
            f"I couldn't find an event called \"{spoken}\". Try saying the full event name!",
            entity_type="event",
            query=spoken
        )
    kb_event = match.event

    terms = [kb_event.name]
    if spoken.lower() != kb_event.name.lower():
        terms.append(spoken)

    rows: List[Dict[str, Any]] = []
    for term in terms:
        try:
            rows = await request.registry.event_service.get_published_events(
                search=term,
                limit=settings.EVENT_SEARCH_LIMIT
            )
        except Exception as e:
            raise ServiceUnavailableException(
                "events",
                "Could not reach the events service right now. Please try again.",
                str(e)
            ) from e
        if rows:
            break

    row = reconcile_rows(rows, kb_event.name)
    if row is None:
        raise EntityNotFoundException(
            f"I couldn't find \"{kb_event.name}\" among the bookable events. Try the events page!",
            entity_type="event",
            query=spoken
        )

    logger.debug(f"Cart lookup '{spoken}' -> row {row.get('id')} ({row.get('title')})")
    return kb_event, row


def build_cart_item(row: Dict[str, Any]) -> Dict[str, Any]:
    images = row.get("images") or []
    return {
        "eventId": row.get("id"),
        "title": row.get("title"),
        "ticketPrice": float(row.get("ticket_price") or 0),
        "quantity": 1,
        "venue": row.get("venue"),
        "startTime": row.get("start_time"),
        "image": images[0] if images else None,
        "available": seats_available(row),
    }


async def add_to_cart_handler(request: ResolveRequest) -> ResolveResult:
    kb_event, row = await find_bookable_event(request)

    if is_sold_out(row):
        title = row.get("title")
        logger.info(f"Event sold out: {title}")
        return ResolveResult.fail(
            f"Sorry, \"{title}\" is sold out! Check out other events.",
            request.current_page,
            data={
                "soldOut": True,
                "event": kb_event,
                "eventId": row.get("id"),
                "eventTitle": title,
            }
        )

    return ResolveResult.ok(
        {"event": kb_event, "cartItem": build_cart_item(row)},
        request.current_page
    )


async def remove_from_cart_handler(request: ResolveRequest) -> ResolveResult:
    kb_event, row = await find_bookable_event(request)
    return ResolveResult.ok(
        {"event": kb_event, "eventId": row.get("id"), "eventTitle": row.get("title")},
        request.current_page
    )


def register_cart_resolvers(registry: ResolverRegistry):
    """Register the cart resolvers."""

    registry.register(Resolver(
        name="add_to_cart",
        handler=add_to_cart_handler,
        intents=[IntentId.ADD_TO_CART, IntentId.ADD_CART_AND_CHECKOUT]
    ))

    registry.register(Resolver(
        name="remove_from_cart",
        handler=remove_from_cart_handler,
        intents=[IntentId.REMOVE_FROM_CART]
    ))

    logger.info("Cart resolvers registered")
