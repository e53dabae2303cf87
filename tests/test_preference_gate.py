"""Tests for the per-category push preference gate."""

from __future__ import annotations

from notifier.application.use_cases.notifications import PreferenceGate
from notifier.domain.entities import NotificationCategory
from notifier.infrastructure.database import SessionLocal
from notifier.infrastructure.models import NotificationPreferencesModel


def _store_preferences(user_id: int, **flags) -> None:
    with SessionLocal() as session:
        model = session.get(NotificationPreferencesModel, user_id)
        if model is None:
            model = NotificationPreferencesModel(user_id=user_id)
        for column, value in flags.items():
            setattr(model, column, value)
        session.add(model)
        session.commit()


def test_missing_preferences_allow_every_category() -> None:
    gate = PreferenceGate(SessionLocal, ttl_seconds=0)

    assert all(gate.is_push_allowed(1, category) for category in NotificationCategory)


def test_disabled_category_is_denied_and_null_flags_allowed() -> None:
    _store_preferences(1, notify_communities=False, notify_forums=None)
    gate = PreferenceGate(SessionLocal, ttl_seconds=0)

    assert gate.is_push_allowed(1, "community") is False
    assert gate.is_push_allowed(1, NotificationCategory.FORUM) is True
    assert gate.is_push_allowed(1, NotificationCategory.DIRECT_MESSAGE) is True


def test_preferences_are_cached_until_ttl_or_invalidation() -> None:
    now = [0.0]
    gate = PreferenceGate(SessionLocal, ttl_seconds=60, clock=lambda: now[0])

    assert gate.is_push_allowed(1, NotificationCategory.FEED_ACTIVITY) is True
    _store_preferences(1, notify_feed=False)

    assert gate.is_push_allowed(1, NotificationCategory.FEED_ACTIVITY) is True

    now[0] = 61.0
    assert gate.is_push_allowed(1, NotificationCategory.FEED_ACTIVITY) is False

    _store_preferences(1, notify_feed=True)
    gate.invalidate(1)
    assert gate.is_push_allowed(1, NotificationCategory.FEED_ACTIVITY) is True
