"""Render notification content and the minimal push payload."""

from __future__ import annotations

from typing import Any, Mapping

from notifier.domain.entities import Notification, NotificationCategory, PushMessage
from notifier.utils import truncate_text

PUSH_BODY_MAX_LENGTH = 100

_DEFAULT_TITLES: Mapping[NotificationCategory, str] = {
    NotificationCategory.DIRECT_MESSAGE: "New message",
    NotificationCategory.COMMUNITY: "Community update",
    NotificationCategory.FORUM: "New forum activity",
    NotificationCategory.FEED_ACTIVITY: "New activity",
    NotificationCategory.EVENT_REMINDER: "Event reminder",
}

# payload "type" -> deep link path segment
_LINK_SEGMENTS: Mapping[str, str] = {
    "post": "posts",
    "comment": "posts",
    "like": "posts",
    "community": "communities",
    "event": "events",
    "event_reminder": "events",
    "message": "messages",
    "dm": "messages",
    "prayer": "prayers",
    "prayer_request": "prayers",
    "forum": "questions",
    "question": "questions",
    "user": "profile",
    "follow": "profile",
}

_SOURCE_ID_KEYS = ("sourceId", "source_id", "eventId", "event_id", "id")


def render_content(
    category: NotificationCategory, payload: Mapping[str, Any]
) -> tuple[str, str]:
    """Return the ``(title, body)`` stored with the in-app notification."""

    title = str(payload.get("title") or "").strip()
    if not title and category is NotificationCategory.EVENT_REMINDER and payload.get("eventTitle"):
        title = f"Reminder: {payload['eventTitle']}"
    body = str(payload.get("body") or "").strip()
    return title or _DEFAULT_TITLES[category], body


def build_deep_link(payload: Mapping[str, Any], *, scheme: str) -> str | None:
    """Derive an app deep link such as ``theconnection://events/12``."""

    kind = str(payload.get("type") or "").strip().lower()
    segment = _LINK_SEGMENTS.get(kind)
    if segment is None:
        return None
    if segment == "profile":
        target = payload.get("actorId") or payload.get("sourceId")
    else:
        target = next((payload[key] for key in _SOURCE_ID_KEYS if payload.get(key)), None)
    if target is None:
        return None
    return f"{scheme}://{segment}/{target}"


def build_push_message(notification: Notification, *, scheme: str) -> PushMessage:
    """Return the minimal push message for ``notification``.

    Only the category, the deep link and the notification id travel to the
    provider; the client fetches the full record from the inbox.
    """

    data: dict[str, Any] = {
        "category": notification.category.value,
        "notificationId": notification.id,
    }
    link = build_deep_link(notification.payload, scheme=scheme)
    if link is not None:
        data["link"] = link
    return PushMessage(
        title=notification.title,
        body=truncate_text(notification.body, PUSH_BODY_MAX_LENGTH),
        data=data,
    )


__all__ = [
    "PUSH_BODY_MAX_LENGTH",
    "build_deep_link",
    "build_push_message",
    "render_content",
]
