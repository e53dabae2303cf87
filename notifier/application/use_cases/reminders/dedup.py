"""In-memory record of the (event, user) pairs that were already reminded."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from notifier.domain.entities import ReminderDedupEntry
from notifier.utils import now_in_app_timezone

PairKey = tuple[int, int]


class ReminderDedupCache:
    """Suppress repeated reminders across scheduler cycles.

    A pair is first *reserved* (atomically with the presence check), then
    either *confirmed* after a successful dispatch or *released* so the next
    cycle retries it. Entries are lost when the process restarts.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_in_app_timezone) -> None:
        self._clock = clock
        self._entries: dict[PairKey, ReminderDedupEntry] = {}
        self._pending: set[PairKey] = set()
        self._lock = threading.Lock()

    def reserve(self, event_id: int, user_id: int) -> bool:
        """Claim the pair; ``False`` when it was reminded or is in flight."""

        key = (event_id, user_id)
        with self._lock:
            if key in self._entries or key in self._pending:
                return False
            self._pending.add(key)
            return True

    def confirm(self, event_id: int, user_id: int, starts_at: datetime) -> ReminderDedupEntry:
        key = (event_id, user_id)
        entry = ReminderDedupEntry(
            event_id=event_id,
            user_id=user_id,
            starts_at=starts_at,
            inserted_at=self._clock(),
        )
        with self._lock:
            self._pending.discard(key)
            self._entries[key] = entry
        return entry

    def release(self, event_id: int, user_id: int) -> None:
        with self._lock:
            self._pending.discard((event_id, user_id))

    def evict_started(self, now: datetime) -> int:
        """Drop entries whose event already started; return how many."""

        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.starts_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def entries(self) -> list[ReminderDedupEntry]:
        with self._lock:
            return list(self._entries.values())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._pending.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ReminderDedupCache"]
