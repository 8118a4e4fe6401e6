"""
SQLAlchemy Database Models.
Event, department and registration tables backing the live cart and stats lookups.
"""

from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Text, JSON, Boolean
from sqlalchemy.orm import relationship

from citro.db.database import Base


class Department(Base):
    """Organizing department (CSE, MBA, Core Team, ...)."""
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)

    events = relationship("Event", back_populates="department", lazy="selectin")

    def __repr__(self):
        return f"<Department {self.code}>"


class Event(Base):
    """Bookable fest event."""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    tagline = Column(String(500))
    description = Column(Text)

    department_id = Column(Integer, ForeignKey("departments.id"), index=True)
    venue = Column(String(255))
    start_time = Column(DateTime, index=True)
    end_time = Column(DateTime)

    ticket_price = Column(Float, nullable=False, default=0.0)
    max_tickets = Column(Integer, nullable=False, default=0)
    registered = Column(Integer, nullable=False, default=0)

    prize = Column(Text)
    tags = Column(JSON)
    images = Column(JSON)

    status = Column(String(50), default="published", index=True)
    visibility = Column(String(50), default="public")
    featured = Column(Boolean, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, onupdate=datetime.utcnow)

    department = relationship("Department", back_populates="events", lazy="selectin")
    registrations = relationship("Registration", back_populates="event", lazy="selectin")

    @property
    def seats_left(self) -> int:
        return max(0, (self.max_tickets or 0) - (self.registered or 0))

    def __repr__(self):
        return f"<Event {self.id}: {self.name}>"


class Registration(Base):
    """A user's booking for an event."""
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(50), index=True)
    event_id = Column(Integer, ForeignKey("events.id"), index=True)
    quantity = Column(Integer, default=1)
    amount_paid = Column(Float, default=0.0)
    payment_status = Column(String(50), default="pending", index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="registrations")

    def __repr__(self):
        return f"<Registration {self.id}: event={self.event_id} {self.payment_status}>"
