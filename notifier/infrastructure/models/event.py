"""SQLAlchemy models for the events and RSVPs read by the reminder scheduler.

Both tables belong to the event-management subsystem.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from notifier.infrastructure.database import Base


class EventModel(Base):
    """Scheduled community event."""

    __tablename__ = "event"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    starts_at = Column(DateTime(), nullable=False, index=True)
    organizer_id = Column(Integer, nullable=True)


class EventRSVPModel(Base):
    """Attendance answer of a user for an event."""

    __tablename__ = "event_rsvp"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_rsvp_user"),)

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("event.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    status = Column(String(20), nullable=False)


__all__ = ["EventModel", "EventRSVPModel"]
