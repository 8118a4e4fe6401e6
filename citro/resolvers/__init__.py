"""Command resolvers: intent + entities + context -> ResolveResult."""

from functools import lru_cache
from typing import Any, Dict, Optional

from citro.core.models import CommandContext, ResolveResult
from citro.resolvers.registry import Resolver, ResolverRegistry, ResolveRequest


def build_registry(dashboard_service: Any = None, event_service: Any = None) -> ResolverRegistry:
    """Fully registered resolver registry with the given collaborators."""
    return ResolverRegistry(
        dashboard_service=dashboard_service,
        event_service=event_service
    ).initialize()


@lru_cache()
def get_registry() -> ResolverRegistry:
    """Process-wide registry backed by the database repositories."""
    return build_registry()


async def resolve_command(
    intent,
    entities: Optional[Dict[str, str]] = None,
    context: Optional[CommandContext] = None,
    registry: Optional[ResolverRegistry] = None
) -> ResolveResult:
    """Resolve an intent with the default registry unless one is given."""
    registry = registry or get_registry()
    return await registry.resolve(intent, entities, context)


__all__ = [
    "Resolver",
    "ResolverRegistry",
    "ResolveRequest",
    "build_registry",
    "get_registry",
    "resolve_command",
]
