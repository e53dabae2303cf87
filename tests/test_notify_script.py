"""Tests for the operator command line helpers."""

from __future__ import annotations

import argparse

import pytest

from notifier.application.use_cases.notifications import NotificationStore
from notifier.config import Settings
from notifier.infrastructure.database import SessionLocal
from scripts.notify import _run, scheduler_conflict_warning


def _settings(**overrides) -> Settings:
    return Settings(database_url="sqlite://", secret_key="k", **overrides)


def test_warns_when_api_scheduler_is_enabled() -> None:
    warning = scheduler_conflict_warning(_settings(reminder_scheduler_enabled=True))

    assert warning is not None
    assert "REMINDER_SCHEDULER_ENABLED" in warning


def test_no_warning_when_api_scheduler_is_disabled() -> None:
    assert scheduler_conflict_warning(_settings(reminder_scheduler_enabled=False)) is None


@pytest.mark.anyio
async def test_send_command_stores_notifications(capsys) -> None:
    args = argparse.Namespace(
        command="send",
        category="community",
        users=[1, 2],
        title="Welcome",
        body=None,
        payload='{"type": "community", "sourceId": 3}',
    )

    await _run(args)

    assert "Created: 2" in capsys.readouterr().out
    with SessionLocal() as session:
        [notification] = NotificationStore(session).list_for_user(2)
    assert notification.title == "Welcome"
    assert notification.payload["sourceId"] == 3
