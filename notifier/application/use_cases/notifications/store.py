"""In-app notification store used by the dispatcher and the inbox API."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import MarkReadResult, Notification, NotificationCategory
from notifier.infrastructure.notifications import render_content
from notifier.infrastructure.repositories import NotificationRepository
from notifier.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class NotificationStore:
    """Durable notification records; only ``is_read`` ever changes."""

    def __init__(self, session: Session) -> None:
        self._repository = NotificationRepository(session)

    def record(
        self,
        recipient_id: int,
        category: NotificationCategory | str,
        payload: Mapping[str, Any] | None = None,
    ) -> Notification:
        """Persist one notification for ``recipient_id`` and return it.

        The write is committed before returning. Database errors propagate.
        """

        category = NotificationCategory.parse(category)
        payload = dict(payload or {})
        title, body = render_content(category, payload)
        notification = Notification(
            id=None,
            recipient_id=recipient_id,
            category=category,
            title=title,
            body=body,
            payload=payload,
            is_read=False,
            created_at=now_in_app_timezone(),
        )
        return self._repository.create(notification)

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int = DEFAULT_PAGE_SIZE,
        before_id: int | None = None,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        """Return the notifications of ``user_id``, newest first."""

        limit = max(1, min(limit, MAX_PAGE_SIZE))
        return self._repository.list_for_user(
            user_id, limit=limit, before_id=before_id, unread_only=unread_only
        )

    def unread_count(self, user_id: int) -> int:
        return self._repository.count_unread(user_id)

    def mark_read(self, notification_id: int, requesting_user_id: int) -> MarkReadResult:
        """Mark a notification as read if it belongs to ``requesting_user_id``."""

        notification = self._repository.get(notification_id)
        if notification is None:
            return MarkReadResult.NOT_FOUND
        if notification.recipient_id != requesting_user_id:
            logger.info(
                "User %s attempted to mark notification %s owned by user %s",
                requesting_user_id,
                notification_id,
                notification.recipient_id,
            )
            return MarkReadResult.FORBIDDEN
        self._repository.mark_read(notification_id)
        return MarkReadResult.SUCCESS

    def mark_all_read(self, user_id: int) -> int:
        return self._repository.mark_all_read(user_id)


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "NotificationStore"]
