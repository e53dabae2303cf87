"""Notification fan-out: store, token registry, preference gate and dispatcher."""

from .dispatcher import NotificationDispatcher, SessionFactory, create_dispatcher
from .preferences import DEFAULT_CACHE_TTL_SECONDS, PreferenceGate
from .registry import MAX_TOKEN_LENGTH, PushTokenRegistry
from .store import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, NotificationStore

__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MAX_TOKEN_LENGTH",
    "NotificationDispatcher",
    "NotificationStore",
    "PreferenceGate",
    "PushTokenRegistry",
    "SessionFactory",
    "create_dispatcher",
]
