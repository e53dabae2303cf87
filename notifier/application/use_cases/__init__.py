"""Aggregate application use cases."""

from .notifications import (
    NotificationDispatcher,
    NotificationStore,
    PreferenceGate,
    PushTokenRegistry,
)
from .reminders import EventReminderScheduler, ReminderDedupCache

__all__ = [
    "EventReminderScheduler",
    "NotificationDispatcher",
    "NotificationStore",
    "PreferenceGate",
    "PushTokenRegistry",
    "ReminderDedupCache",
]
