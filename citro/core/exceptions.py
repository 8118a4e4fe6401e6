"""
Core exceptions for the Citro voice service.
Custom exception classes for structured error handling.
"""

from typing import Optional, Dict, Any


class CitroException(Exception):
    """Base exception for Citro errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "CITRO_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# =========================
# Request Exceptions
# =========================

class TranscriptValidationException(CitroException):
    """Raised when the incoming transcript is missing or blank."""

    def __init__(self, message: str = "Transcript is required"):
        super().__init__(
            message=message,
            error_code="INVALID_TRANSCRIPT",
            status_code=400
        )


# =========================
# Resolver Exceptions
# =========================

class ResolverException(CitroException):
    """Base exception for command resolution errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="RESOLVER_ERROR",
            status_code=500,
            details=details
        )


class EntityNotFoundException(ResolverException):
    """Raised when a spoken event, department or day cannot be matched."""

    def __init__(self, message: str, entity_type: str, query: Optional[str] = None):
        super().__init__(
            message=message,
            details={"entity_type": entity_type, "query": query}
        )
        self.entity_type = entity_type
        self.query = query


class ServiceUnavailableException(ResolverException):
    """Raised when a downstream collaborator (dashboard, event table) fails."""

    def __init__(self, service: str, user_message: str, error: Optional[str] = None):
        super().__init__(
            message=user_message,
            details={"service": service, "error": error}
        )
        self.service = service


class ResolverConfigurationException(ResolverException):
    """Raised when some intents have no handler registered."""

    def __init__(self, missing: list):
        super().__init__(
            message=f"No resolver registered for intents: {', '.join(missing)}",
            details={"missing_intents": missing}
        )


# =========================
# Database Exceptions
# =========================

class DatabaseException(CitroException):
    """Base exception for database errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=500,
            details=details
        )


class DatabaseNotInitializedException(DatabaseException):
    """Raised when a session is requested before init_db()."""

    def __init__(self):
        super().__init__(
            message="Database not initialized. Call init_db() first.",
            details={"error_type": "not_initialized"}
        )


class RecordNotFoundException(DatabaseException):
    """Raised when a database record is not found."""

    def __init__(self, entity: str, identifier: str):
        super().__init__(
            message=f"{entity} with identifier '{identifier}' not found",
            details={"entity": entity, "identifier": identifier}
        )


# =========================
# Pipeline Exceptions
# =========================

class PipelineException(CitroException):
    """Base exception for pipeline errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="PIPELINE_ERROR",
            status_code=500,
            details=details
        )


class PipelineStageException(PipelineException):
    """Raised when a pipeline stage fails."""

    def __init__(self, stage: str, error: str):
        super().__init__(
            message=f"Pipeline stage '{stage}' failed: {error}",
            details={"stage": stage, "error": error}
        )
