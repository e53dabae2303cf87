"""Command line helpers to trigger notifications outside the API process."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.notifications import create_dispatcher
from notifier.application.use_cases.reminders import (
    DatabaseEventSource,
    EventReminderScheduler,
)
from notifier.config import Settings, get_settings
from notifier.domain.entities import NotificationCategory
from notifier.infrastructure.database import SessionLocal, initialize_database
from notifier.infrastructure.notifications import create_push_sender


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Send notifications through the notification dispatcher.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    send = subcommands.add_parser("send", help="Dispatch one notification to users")
    send.add_argument(
        "--category",
        required=True,
        choices=[category.value for category in NotificationCategory],
        help="Notification category",
    )
    send.add_argument(
        "--user",
        dest="users",
        type=int,
        action="append",
        required=True,
        help="Recipient user id (repeat for several users)",
    )
    send.add_argument("--title", default=None, help="Notification title")
    send.add_argument("--body", default=None, help="Notification body")
    send.add_argument(
        "--payload",
        default="{}",
        help="Extra JSON payload, e.g. '{\"type\": \"post\", \"sourceId\": 12}'",
    )

    reminders = subcommands.add_parser(
        "reminders",
        help="Run a single event reminder scan now (the dedup cache starts empty on every run)",
    )
    reminders.add_argument(
        "--lookahead-hours",
        type=float,
        default=None,
        help="Override the reminder window (defaults to REMINDER_LOOKAHEAD_HOURS)",
    )
    return parser.parse_args()


def scheduler_conflict_warning(settings: Settings) -> str | None:
    """Return a warning when the API process may already be sending reminders."""

    if not settings.reminder_scheduler_enabled:
        return None
    return (
        "Warning: REMINDER_SCHEDULER_ENABLED is true. If the API is running, its\n"
        "scheduler may already have reminded these attendees and they will be\n"
        "reminded again by this run."
    )


async def _run(args: argparse.Namespace) -> None:
    settings = get_settings()
    push_sender = create_push_sender(settings)
    dispatcher = create_dispatcher(
        settings, session_factory=SessionLocal, push_sender=push_sender
    )
    try:
        if args.command == "send":
            payload = json.loads(args.payload)
            if not isinstance(payload, dict):
                raise SystemExit("--payload must be a JSON object.")
            if args.title:
                payload["title"] = args.title
            if args.body:
                payload["body"] = args.body
            result = await dispatcher.dispatch(args.category, args.users, payload)
            print(
                "Dispatch finished:\n"
                f"  Created: {result.created}\n"
                f"  Pushed: {result.pushed}\n"
                f"  Push failures: {result.push_failures}\n"
                f"  Failed recipients: {result.failed_recipients}\n"
                f"  Suppressed by preferences: {result.suppressed}\n"
                f"  Invalid tokens removed: {result.tokens_removed}"
            )
        else:
            warning = scheduler_conflict_warning(settings)
            if warning:
                print(warning, file=sys.stderr)
            hours = args.lookahead_hours or settings.reminder_lookahead_hours
            scheduler = EventReminderScheduler(
                dispatcher=dispatcher,
                event_source=DatabaseEventSource(SessionLocal),
                lookahead=timedelta(hours=hours),
            )
            report = await scheduler.run_cycle()
            print(
                "Reminder scan finished:\n"
                f"  Events scanned: {report.events_scanned}\n"
                f"  Reminders sent: {report.dispatched}\n"
                f"  Failures: {report.failures}"
            )
    finally:
        await push_sender.aclose()


def main() -> None:
    """Run the requested command."""

    args = parse_args()
    try:
        initialize_database()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not prepare the database: {exc}") from exc
    try:
        asyncio.run(_run(args))
    except (ValueError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Invalid arguments: {exc}") from exc


if __name__ == "__main__":
    main()
