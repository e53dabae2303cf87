"""Read access to the notification preferences written by the settings UI."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationCategory, NotificationPreferences
from notifier.infrastructure.models import NotificationPreferencesModel

CATEGORY_COLUMNS: Mapping[NotificationCategory, str] = MappingProxyType(
    {
        NotificationCategory.DIRECT_MESSAGE: "notify_direct_messages",
        NotificationCategory.COMMUNITY: "notify_communities",
        NotificationCategory.FORUM: "notify_forums",
        NotificationCategory.FEED_ACTIVITY: "notify_feed",
        NotificationCategory.EVENT_REMINDER: "notify_event_reminders",
    }
)

_unmapped = set(NotificationCategory) - set(CATEGORY_COLUMNS)
if _unmapped:  # pragma: no cover
    raise RuntimeError(
        "Notification categories without a preference column: "
        + ", ".join(sorted(category.value for category in _unmapped))
    )


class NotificationPreferencesRepository:
    """Load :class:`NotificationPreferences` for a user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: int) -> NotificationPreferences | None:
        model = self.session.get(NotificationPreferencesModel, user_id)
        if model is None:
            return None
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationPreferencesModel) -> NotificationPreferences:
        flags: dict[NotificationCategory, bool] = {}
        for category, column in CATEGORY_COLUMNS.items():
            value = getattr(model, column)
            flags[category] = True if value is None else bool(value)
        return NotificationPreferences(owner_id=model.user_id, flags=flags)


__all__ = ["CATEGORY_COLUMNS", "NotificationPreferencesRepository"]
