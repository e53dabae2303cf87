"""Event and RSVP reads consumed by the reminder scheduler."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol

from sqlalchemy.orm import Session

from notifier.domain.entities import UpcomingEvent
from notifier.infrastructure.repositories import EventRepository


class EventSource(Protocol):
    """Blocking reads over the events owned by the event-management subsystem."""

    def list_upcoming(self, *, after: datetime, until: datetime) -> Sequence[UpcomingEvent]:
        ...

    def list_confirmed_attendees(self, event_id: int) -> Sequence[int]:
        ...


class DatabaseEventSource:
    """:class:`EventSource` backed by the shared relational database."""

    def __init__(self, session_factory: Callable[[], AbstractContextManager[Session]]) -> None:
        self._session_factory = session_factory

    def list_upcoming(self, *, after: datetime, until: datetime) -> Sequence[UpcomingEvent]:
        with self._session_factory() as session:
            return EventRepository(session).list_upcoming(after=after, until=until)

    def list_confirmed_attendees(self, event_id: int) -> Sequence[int]:
        with self._session_factory() as session:
            return EventRepository(session).list_confirmed_attendees(event_id)


__all__ = ["DatabaseEventSource", "EventSource"]
