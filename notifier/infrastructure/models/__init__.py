"""ORM models used by the application infrastructure."""

from .event import EventModel, EventRSVPModel
from .notification import NotificationModel
from .notification_preferences import NotificationPreferencesModel
from .push_token import PushTokenModel

__all__ = [
    "EventModel",
    "EventRSVPModel",
    "NotificationModel",
    "NotificationPreferencesModel",
    "PushTokenModel",
]
