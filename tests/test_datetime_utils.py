from datetime import datetime, timedelta, timezone

from notifier.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    resolve_timezone,
)


def test_resolve_timezone_defaults_to_utc() -> None:
    assert resolve_timezone(None) is timezone.utc
    assert resolve_timezone(" gmt ") is timezone.utc
    assert resolve_timezone("Not/AZone") is timezone.utc


def test_naive_values_are_read_as_app_time() -> None:
    stored = datetime(2026, 10, 18, 9, 30)

    assert ensure_app_timezone(stored) == stored.replace(tzinfo=timezone.utc)
    assert ensure_app_timezone(None) is None


def test_aware_values_are_converted_before_storing() -> None:
    value = datetime(2026, 10, 18, 9, 30, tzinfo=timezone(timedelta(hours=-5)))

    assert ensure_app_naive_datetime(value) == datetime(2026, 10, 18, 14, 30)
