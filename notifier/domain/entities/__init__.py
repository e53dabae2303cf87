"""Domain entities exposed by the application."""

from .dispatch import DispatchResult, PushMessage, PushOutcome
from .event import (
    CONFIRMED_RSVP_STATUSES,
    RSVP_STATUS_GOING,
    RSVP_STATUS_NOT_GOING,
    ReminderDedupEntry,
    UpcomingEvent,
)
from .notification import MarkReadResult, Notification, NotificationCategory
from .preferences import NotificationPreferences
from .push_token import PushPlatform, PushToken, TokenRemovalResult

__all__ = [
    "CONFIRMED_RSVP_STATUSES",
    "RSVP_STATUS_GOING",
    "RSVP_STATUS_NOT_GOING",
    "DispatchResult",
    "MarkReadResult",
    "Notification",
    "NotificationCategory",
    "NotificationPreferences",
    "PushMessage",
    "PushOutcome",
    "PushPlatform",
    "PushToken",
    "ReminderDedupEntry",
    "TokenRemovalResult",
    "UpcomingEvent",
]
