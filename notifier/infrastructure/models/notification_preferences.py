"""SQLAlchemy model for the per-user notification settings.

The table is written by the user settings surface; this service only reads
it. A ``NULL`` flag means the user never changed the default (allowed).
"""

from sqlalchemy import Boolean, Column, DateTime, Integer

from notifier.infrastructure.database import Base


class NotificationPreferencesModel(Base):
    """Database representation of the push opt-in flags of a user."""

    __tablename__ = "notification_preferences"

    user_id = Column(Integer, primary_key=True)
    notify_direct_messages = Column(Boolean, nullable=True)
    notify_communities = Column(Boolean, nullable=True)
    notify_forums = Column(Boolean, nullable=True)
    notify_feed = Column(Boolean, nullable=True)
    notify_event_reminders = Column(Boolean, nullable=True)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationPreferencesModel"]
