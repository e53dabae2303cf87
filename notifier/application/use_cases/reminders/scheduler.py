"""Background scan that reminds confirmed attendees of upcoming events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from anyio import to_thread

from notifier.application.use_cases.notifications import NotificationDispatcher
from notifier.config import Settings
from notifier.domain.entities import NotificationCategory, UpcomingEvent
from notifier.utils import now_in_app_timezone

from .dedup import ReminderDedupCache
from .sources import EventSource

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60 * 60
DEFAULT_LOOKAHEAD = timedelta(hours=24)


class SchedulerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class ReminderCycleReport:
    """Counters describing one scan."""

    events_scanned: int = 0
    dispatched: int = 0
    skipped: int = 0
    failures: int = 0
    evicted: int = 0


class EventReminderScheduler:
    """Periodically dispatch ``event-reminder`` notifications.

    Each cycle looks at events starting within ``lookahead`` and notifies
    every confirmed attendee once; the :class:`ReminderDedupCache` remembers
    who was already reminded. Only one cycle runs at a time and no failure
    escapes the background loop.
    """

    def __init__(
        self,
        *,
        dispatcher: NotificationDispatcher,
        event_source: EventSource,
        dedup_cache: ReminderDedupCache | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        lookahead: timedelta = DEFAULT_LOOKAHEAD,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._dispatcher = dispatcher
        self._event_source = event_source
        self._dedup_cache = dedup_cache if dedup_cache is not None else ReminderDedupCache(clock=clock)
        self._interval = interval_seconds
        self._lookahead = lookahead
        self._clock = clock
        self._cycle_lock = asyncio.Lock()
        self._stop_requested = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> SchedulerState:
        if self._task is not None and not self._task.done():
            return SchedulerState.RUNNING
        return SchedulerState.STOPPED

    @property
    def dedup_cache(self) -> ReminderDedupCache:
        return self._dedup_cache

    def start(self) -> asyncio.Task:
        """Launch the background loop on the running event loop."""

        if self._task is not None and not self._task.done():
            return self._task
        self._stop_requested.clear()
        self._task = asyncio.get_running_loop().create_task(
            self._run_forever(), name="event-reminder-scheduler"
        )
        logger.info(
            "Event reminder scheduler started (every %ss, lookahead %s)",
            self._interval,
            self._lookahead,
        )
        return self._task

    async def stop(self) -> None:
        """Stop after the current cycle, if any, has finished."""

        task = self._task
        if task is None:
            return
        self._stop_requested.set()
        try:
            await task
        finally:
            self._task = None
            logger.info("Event reminder scheduler stopped")

    def stats(self) -> dict[str, object]:
        return {"state": self.state.value, "reminded_pairs": len(self._dedup_cache)}

    def clear_cache(self) -> None:
        self._dedup_cache.clear()
        logger.info("Event reminder cache cleared")

    async def run_cycle(self) -> ReminderCycleReport:
        """Run one scan, waiting for a cycle already in progress to finish."""

        async with self._cycle_lock:
            return await self._scan()

    async def _run_forever(self) -> None:
        while not self._stop_requested.is_set():
            try:
                report = await self.run_cycle()
            except Exception:
                logger.exception("Event reminder cycle crashed")
            else:
                if report.dispatched or report.failures:
                    logger.info(
                        "Event reminder cycle: events=%s dispatched=%s skipped=%s failures=%s evicted=%s",
                        report.events_scanned,
                        report.dispatched,
                        report.skipped,
                        report.failures,
                        report.evicted,
                    )
            try:
                await asyncio.wait_for(self._stop_requested.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                continue

    async def _scan(self) -> ReminderCycleReport:
        report = ReminderCycleReport()
        now = self._clock()
        try:
            events = await to_thread.run_sync(
                lambda: self._event_source.list_upcoming(after=now, until=now + self._lookahead)
            )
        except Exception:
            logger.exception("Could not load upcoming events for reminders")
            events = []
            report.failures += 1

        for event in events:
            report.events_scanned += 1
            try:
                attendees = await to_thread.run_sync(
                    self._event_source.list_confirmed_attendees, event.id
                )
            except Exception:
                logger.exception("Could not load attendees of event %s", event.id)
                report.failures += 1
                continue
            for user_id in dict.fromkeys(attendees):
                await self._remind(event, user_id, report)

        report.evicted = self._dedup_cache.evict_started(now)
        return report

    async def _remind(self, event: UpcomingEvent, user_id: int, report: ReminderCycleReport) -> None:
        if not self._dedup_cache.reserve(event.id, user_id):
            report.skipped += 1
            return

        payload = {
            "type": "event",
            "eventId": event.id,
            "eventTitle": event.title,
            "startsAt": event.starts_at.isoformat(),
            "body": f"Starts {event.starts_at:%Y-%m-%d %H:%M}",
        }
        try:
            result = await self._dispatcher.dispatch(
                NotificationCategory.EVENT_REMINDER, {user_id}, payload
            )
        except Exception:
            self._dedup_cache.release(event.id, user_id)
            logger.exception("Reminder dispatch for event %s, user %s failed", event.id, user_id)
            report.failures += 1
            return

        if result.created < 1:
            self._dedup_cache.release(event.id, user_id)
            report.failures += 1
            return
        self._dedup_cache.confirm(event.id, user_id, event.starts_at)
        report.dispatched += 1


def create_reminder_scheduler(
    settings: Settings,
    *,
    dispatcher: NotificationDispatcher,
    event_source: EventSource,
) -> EventReminderScheduler:
    """Build a scheduler configured from ``settings``."""

    return EventReminderScheduler(
        dispatcher=dispatcher,
        event_source=event_source,
        interval_seconds=settings.reminder_interval_seconds,
        lookahead=timedelta(hours=settings.reminder_lookahead_hours),
    )


__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_LOOKAHEAD",
    "EventReminderScheduler",
    "ReminderCycleReport",
    "SchedulerState",
    "create_reminder_scheduler",
]
