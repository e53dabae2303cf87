"""Repository implementations for infrastructure layer."""

from .event_repository import EventRepository
from .notification_repository import NotificationRepository
from .preferences_repository import CATEGORY_COLUMNS, NotificationPreferencesRepository
from .push_token_repository import PushTokenRepository

__all__ = [
    "CATEGORY_COLUMNS",
    "EventRepository",
    "NotificationPreferencesRepository",
    "NotificationRepository",
    "PushTokenRepository",
]
