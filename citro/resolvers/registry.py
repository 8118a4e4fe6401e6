"""
Resolver Registry.
Maps detected intents to handler coroutines and runs them.

Handlers are looked up by IntentId first, then by the intent's declared
ActionType, so the dataset stays the single source of truth for what an
intent does and only intents with real lookups need their own handler.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from citro.core.exceptions import (
    EntityNotFoundException,
    ResolverConfigurationException,
    ServiceUnavailableException,
)
from citro.core.models import CommandContext, ResolveResult
from citro.voice.intent_dataset import ActionType, IntentAction, IntentId, get_declared_action

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong while handling that. Please try again."


@dataclass
class ResolveRequest:
    """Everything a handler needs for one command."""
    intent: IntentId
    entities: Dict[str, str]
    context: CommandContext
    action: IntentAction
    registry: "ResolverRegistry"

    @property
    def name(self) -> Optional[str]:
        value = (self.entities.get("name") or "").strip()
        return value or None

    @property
    def current_page(self) -> str:
        return self.context.current_page or "/"


ResolverHandler = Callable[[ResolveRequest], Awaitable[ResolveResult]]


@dataclass
class Resolver:
    """A handler bound to the intents or action types it serves."""
    name: str
    handler: ResolverHandler
    intents: List[IntentId] = field(default_factory=list)
    action_types: List[ActionType] = field(default_factory=list)


class ResolverRegistry:
    """
    Registry for intent resolvers.

    External collaborators are injected so tests can swap them for mocks:
    - dashboard_service: get_stats(), get_upcoming_events(limit=...)
    - event_service: get_published_events(search=..., limit=...)
    """

    def __init__(self, dashboard_service: Any = None, event_service: Any = None):
        self._by_intent: Dict[IntentId, Resolver] = {}
        self._by_action: Dict[ActionType, Resolver] = {}
        self.dashboard_service = dashboard_service
        self.event_service = event_service

    def initialize(self) -> "ResolverRegistry":
        """Register every built-in resolver group and check coverage."""
        from citro.resolvers.navigation import register_navigation_resolvers
        from citro.resolvers.events import register_event_resolvers
        from citro.resolvers.dashboard import register_dashboard_resolvers
        from citro.resolvers.cart import register_cart_resolvers

        if self.dashboard_service is None or self.event_service is None:
            from citro.db.repositories import DashboardRepository, EventRepository
            self.dashboard_service = self.dashboard_service or DashboardRepository()
            self.event_service = self.event_service or EventRepository()

        register_navigation_resolvers(self)
        register_event_resolvers(self)
        register_dashboard_resolvers(self)
        register_cart_resolvers(self)

        self.validate()
        logger.info(
            f"Registered {len(self._by_intent)} intent resolvers "
            f"and {len(self._by_action)} action resolvers"
        )
        return self

    def register(self, resolver: Resolver):
        """Register a resolver for its intents and action types."""
        for intent in resolver.intents:
            self._by_intent[IntentId(intent)] = resolver
        for action_type in resolver.action_types:
            self._by_action[ActionType(action_type)] = resolver
        logger.debug(f"Registered resolver: {resolver.name}")

    def get(self, intent: IntentId) -> Optional[Resolver]:
        """Resolver for an intent, falling back to its declared action type."""
        intent = IntentId(intent)
        resolver = self._by_intent.get(intent)
        if resolver is None:
            resolver = self._by_action.get(get_declared_action(intent).type)
        return resolver

    def missing(self, intents: Optional[Iterable[IntentId]] = None) -> List[str]:
        intents = intents if intents is not None else list(IntentId)
        return [i.value for i in intents if self.get(i) is None]

    def validate(self):
        """Raise if any intent would have no resolver."""
        missing = self.missing()
        if missing:
            raise ResolverConfigurationException(missing)

    async def resolve(
        self,
        intent: IntentId,
        entities: Optional[Dict[str, str]] = None,
        context: Optional[CommandContext] = None
    ) -> ResolveResult:
        """
        Resolve an intent into a structured result.

        Never raises: lookup misses and downstream failures come back as
        ResolveResult(success=False, error=...).
        """
        context = context or CommandContext()
        entities = entities or {}
        current_page = context.current_page or "/"

        try:
            intent = IntentId(intent)
        except ValueError:
            logger.warning(f"Unknown intent id: {intent}")
            return ResolveResult(success=False, current_page=current_page)

        resolver = self.get(intent)
        if resolver is None:
            logger.error(f"No resolver for intent {intent.value}")
            return ResolveResult(success=False, current_page=current_page)

        request = ResolveRequest(
            intent=intent,
            entities=dict(entities),
            context=context,
            action=get_declared_action(intent),
            registry=self,
        )

        start_time = time.time()

        try:
            result = await resolver.handler(request)
        except EntityNotFoundException as e:
            logger.info(f"{intent.value}: {e.details.get('entity_type')} not found ({e.query!r})")
            return ResolveResult.fail(e.message, current_page)
        except ServiceUnavailableException as e:
            logger.error(f"{intent.value}: {e.service} unavailable - {e.details.get('error')}")
            return ResolveResult.fail(e.message, current_page)
        except Exception as e:
            logger.exception(f"Resolver {resolver.name} failed for {intent.value}: {e}")
            return ResolveResult.fail(GENERIC_FAILURE, current_page)

        execution_time = (time.time() - start_time) * 1000
        logger.debug(f"Resolver {resolver.name} handled {intent.value} in {execution_time:.2f}ms")

        return result
