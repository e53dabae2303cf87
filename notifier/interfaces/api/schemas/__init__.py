from .notification import NotificationCountRead, NotificationRead
from .push_token import PushTokenCreate, PushTokenRead

__all__ = [
    "NotificationCountRead",
    "NotificationRead",
    "PushTokenCreate",
    "PushTokenRead",
]
