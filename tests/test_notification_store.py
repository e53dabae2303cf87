"""Tests for the in-app notification store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from notifier.application.use_cases.notifications import NotificationStore
from notifier.domain.entities import MarkReadResult, Notification, NotificationCategory
from notifier.infrastructure.repositories import NotificationRepository


def test_record_persists_unread_notification_with_rendered_content(session) -> None:
    store = NotificationStore(session)

    notification = store.record(
        7,
        "community",
        {"type": "post", "sourceId": 3, "actorId": 9, "title": "New post in Prayer Circle"},
    )

    assert notification.id is not None
    assert notification.recipient_id == 7
    assert notification.category is NotificationCategory.COMMUNITY
    assert notification.title == "New post in Prayer Circle"
    assert notification.body == ""
    assert notification.is_read is False
    assert notification.created_at is not None
    assert notification.payload["sourceId"] == 3


def test_record_uses_default_title_for_category(session) -> None:
    notification = NotificationStore(session).record(1, NotificationCategory.DIRECT_MESSAGE, {})

    assert notification.title == "New message"


def test_record_rejects_unknown_category(session) -> None:
    with pytest.raises(ValueError):
        NotificationStore(session).record(1, "newsletter", {})


def test_list_for_user_returns_newest_first_and_only_own_records(session) -> None:
    store = NotificationStore(session)
    first = store.record(1, "forum", {"title": "first"})
    store.record(2, "forum", {"title": "someone else"})
    second = store.record(1, "forum", {"title": "second"})

    notifications = store.list_for_user(1)

    assert [n.id for n in notifications] == [second.id, first.id]


def test_list_for_user_supports_cursor_and_unread_filter(session) -> None:
    store = NotificationStore(session)
    ids = [store.record(1, "feed-activity", {"title": f"n{i}"}).id for i in range(4)]
    store.mark_read(ids[3], 1)

    page = store.list_for_user(1, limit=2)
    older = store.list_for_user(1, before_id=page[-1].id)
    unread = store.list_for_user(1, unread_only=True)

    assert [n.id for n in page] == [ids[3], ids[2]]
    assert [n.id for n in older] == [ids[1], ids[0]]
    assert ids[3] not in [n.id for n in unread]


def test_mark_read_by_owner_sets_flag(session) -> None:
    store = NotificationStore(session)
    notification = store.record(1, "community", {})

    assert store.mark_read(notification.id, 1) is MarkReadResult.SUCCESS
    assert store.list_for_user(1)[0].is_read is True
    assert store.unread_count(1) == 0


def test_mark_read_by_other_user_is_forbidden_and_leaves_flag(session) -> None:
    store = NotificationStore(session)
    notification = store.record(1, "community", {})

    assert store.mark_read(notification.id, 2) is MarkReadResult.FORBIDDEN
    assert store.list_for_user(1)[0].is_read is False


def test_mark_read_missing_notification(session) -> None:
    assert NotificationStore(session).mark_read(999, 1) is MarkReadResult.NOT_FOUND


def test_mark_all_read_only_touches_own_unread(session) -> None:
    store = NotificationStore(session)
    store.record(1, "forum", {})
    store.record(1, "forum", {})
    store.record(2, "forum", {})

    assert store.unread_count(1) == 2
    assert store.mark_all_read(1) == 2
    assert store.mark_all_read(1) == 0
    assert store.unread_count(2) == 1


def test_cursor_paging_follows_insertion_order(session) -> None:
    repository = NotificationRepository(session)
    created_late = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def build(created_at: datetime) -> Notification:
        return Notification(
            id=None,
            recipient_id=1,
            category=NotificationCategory.FORUM,
            title="t",
            body="",
            created_at=created_at,
        )

    first = repository.create(build(created_late))
    second = repository.create(build(created_late - timedelta(seconds=5)))
    store = NotificationStore(session)

    page = store.list_for_user(1, limit=1)
    rest = store.list_for_user(1, before_id=page[-1].id)

    assert [n.id for n in page] == [second.id]
    assert [n.id for n in rest] == [first.id]
