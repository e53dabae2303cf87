"""Tests for the push token registry."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from notifier.application.use_cases.notifications import PushTokenRegistry
from notifier.domain.entities import PushPlatform, TokenRemovalResult

TOKEN = "ExponentPushToken[abc123]"


def test_register_creates_token_for_user(session) -> None:
    registry = PushTokenRegistry(session)

    token = registry.register(1, TOKEN, "iOS")

    assert token.owner_id == 1
    assert token.platform is PushPlatform.IOS
    assert [t.token for t in registry.tokens_for(1)] == [TOKEN]


def test_unknown_platform_is_normalized(session) -> None:
    token = PushTokenRegistry(session).register(1, TOKEN, "web")

    assert token.platform is PushPlatform.UNKNOWN


def test_register_blank_token_is_rejected(session) -> None:
    with pytest.raises(ValueError):
        PushTokenRegistry(session).register(1, "   ", "android")


def test_reregistering_under_other_user_reassigns_and_refreshes(session) -> None:
    start = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
    moments = iter([start, start + timedelta(hours=2)])
    registry = PushTokenRegistry(session, clock=lambda: next(moments))

    registry.register(1, TOKEN, "android")
    moved = registry.register(2, TOKEN, "android")

    assert moved.owner_id == 2
    assert moved.last_used_at == start + timedelta(hours=2)
    assert registry.tokens_for(1) == []
    assert [t.token for t in registry.tokens_for(2)] == [TOKEN]


def test_remove_checks_ownership(session) -> None:
    registry = PushTokenRegistry(session)
    registry.register(1, TOKEN, "ios")

    assert registry.remove(TOKEN, 2) is TokenRemovalResult.FORBIDDEN
    assert [t.token for t in registry.tokens_for(1)] == [TOKEN]
    assert registry.remove(TOKEN, 1) is TokenRemovalResult.DELETED
    assert registry.remove(TOKEN, 1) is TokenRemovalResult.NOT_FOUND


def test_remove_invalid_skips_ownership_check(session) -> None:
    registry = PushTokenRegistry(session)
    registry.register(3, TOKEN, "ios")

    assert registry.remove_invalid(TOKEN) is True
    assert registry.remove_invalid(TOKEN) is False
    assert registry.tokens_for(3) == []
