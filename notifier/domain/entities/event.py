"""Read-only views over events owned by the event-management subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

RSVP_STATUS_GOING = "going"
RSVP_STATUS_NOT_GOING = "not_going"

CONFIRMED_RSVP_STATUSES: tuple[str, ...] = (RSVP_STATUS_GOING,)


@dataclass(frozen=True)
class UpcomingEvent:
    """Minimal event information needed to build a reminder."""

    id: int
    title: str
    starts_at: datetime
    organizer_id: int | None = None


@dataclass(frozen=True)
class ReminderDedupEntry:
    """Marks an (event, user) pair that already received its reminder."""

    event_id: int
    user_id: int
    starts_at: datetime
    inserted_at: datetime


__all__ = [
    "CONFIRMED_RSVP_STATUSES",
    "RSVP_STATUS_GOING",
    "RSVP_STATUS_NOT_GOING",
    "ReminderDedupEntry",
    "UpcomingEvent",
]
