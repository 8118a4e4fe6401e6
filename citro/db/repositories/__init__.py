"""Database repositories initialization."""

from citro.db.repositories.events import EventRepository
from citro.db.repositories.dashboard import DashboardRepository

__all__ = [
    "EventRepository",
    "DashboardRepository"
]
