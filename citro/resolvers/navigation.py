"""
Pass-through resolvers.
Navigation, canned replies and page-context intents need no lookup: the UI
acts on the intent's declared action and the reply comes from the templates.
"""

import logging

from citro.core.models import ResolveResult
from citro.resolvers.registry import Resolver, ResolverRegistry, ResolveRequest
from citro.voice.intent_dataset import ActionType, IntentId

logger = logging.getLogger(__name__)


async def passthrough_handler(request: ResolveRequest) -> ResolveResult:
    return ResolveResult.ok(current_page=request.current_page)


async def unknown_handler(request: ResolveRequest) -> ResolveResult:
    return ResolveResult(success=False, current_page=request.current_page)


def register_navigation_resolvers(registry: ResolverRegistry):
    """Register the no-op resolvers."""

    registry.register(Resolver(
        name="passthrough",
        handler=passthrough_handler,
        action_types=[
            ActionType.NAVIGATE,
            ActionType.REPLY,
            ActionType.CONTEXT,
            ActionType.CLOSE,
            ActionType.CLEAR_CART,
            ActionType.DISPLAY,
        ]
    ))

    registry.register(Resolver(
        name="unknown",
        handler=unknown_handler,
        intents=[IntentId.UNKNOWN, IntentId.LOW_CONFIDENCE]
    ))

    logger.info("Navigation resolvers registered")
