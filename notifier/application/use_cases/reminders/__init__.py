"""Event reminder scheduling."""

from .dedup import ReminderDedupCache
from .scheduler import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_LOOKAHEAD,
    EventReminderScheduler,
    ReminderCycleReport,
    SchedulerState,
    create_reminder_scheduler,
)
from .sources import DatabaseEventSource, EventSource

__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_LOOKAHEAD",
    "DatabaseEventSource",
    "EventReminderScheduler",
    "EventSource",
    "ReminderCycleReport",
    "ReminderDedupCache",
    "SchedulerState",
    "create_reminder_scheduler",
]
