"""Core module initialization."""

from citro.core.exceptions import (
    CitroException,
    TranscriptValidationException,
    ResolverException,
    EntityNotFoundException,
    ServiceUnavailableException,
    ResolverConfigurationException,
    DatabaseException,
    PipelineException
)

__all__ = [
    "CitroException",
    "TranscriptValidationException",
    "ResolverException",
    "EntityNotFoundException",
    "ServiceUnavailableException",
    "ResolverConfigurationException",
    "DatabaseException",
    "PipelineException"
]
