"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationCategory(str, Enum):
    """Closed set of notification categories.

    Adding a member requires a matching preference flag; see
    :mod:`notifier.infrastructure.repositories.preferences_repository`.
    """

    DIRECT_MESSAGE = "direct-message"
    COMMUNITY = "community"
    FORUM = "forum"
    FEED_ACTIVITY = "feed-activity"
    EVENT_REMINDER = "event-reminder"

    @classmethod
    def parse(cls, value: "NotificationCategory | str") -> "NotificationCategory":
        """Return the category for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown notification category: {value!r}") from exc


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    recipient_id: int
    category: NotificationCategory
    title: str
    body: str
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None


class MarkReadResult(str, Enum):
    """Outcome of marking a notification as read on behalf of a user."""

    SUCCESS = "success"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not-found"


__all__ = ["MarkReadResult", "Notification", "NotificationCategory"]
