"""Database module initialization."""

from citro.db.database import init_db, close_db, get_db, is_initialized
from citro.db.models import Department, Event, Registration

__all__ = [
    "init_db",
    "close_db",
    "get_db",
    "is_initialized",
    "Department",
    "Event",
    "Registration"
]
