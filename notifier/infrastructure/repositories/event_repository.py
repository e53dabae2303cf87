"""Read access to events and RSVPs for the reminder scheduler."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from notifier.domain.entities import CONFIRMED_RSVP_STATUSES, UpcomingEvent
from notifier.infrastructure.models import EventModel, EventRSVPModel
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class EventRepository:
    """Query upcoming events and their confirmed attendees."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_upcoming(self, *, after: datetime, until: datetime) -> Sequence[UpcomingEvent]:
        """Return events with ``after < starts_at <= until`` ordered by start."""

        query = (
            self.session.query(EventModel)
            .filter(EventModel.starts_at > ensure_app_naive_datetime(after))
            .filter(EventModel.starts_at <= ensure_app_naive_datetime(until))
            .order_by(EventModel.starts_at.asc(), EventModel.id.asc())
        )
        return [
            UpcomingEvent(
                id=model.id,
                title=model.title,
                starts_at=ensure_app_timezone(model.starts_at),
                organizer_id=model.organizer_id,
            )
            for model in query.all()
        ]

    def list_confirmed_attendees(
        self,
        event_id: int,
        *,
        statuses: Iterable[str] = CONFIRMED_RSVP_STATUSES,
    ) -> list[int]:
        rows = (
            self.session.query(EventRSVPModel.user_id)
            .filter(EventRSVPModel.event_id == event_id)
            .filter(EventRSVPModel.status.in_(list(statuses)))
            .order_by(EventRSVPModel.user_id.asc())
            .all()
        )
        return [user_id for (user_id,) in rows]


__all__ = ["EventRepository"]
