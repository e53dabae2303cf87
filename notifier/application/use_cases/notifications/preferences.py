"""Per-user, per-category gate deciding whether a push may be sent."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from contextlib import AbstractContextManager

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationCategory, NotificationPreferences
from notifier.infrastructure.repositories import NotificationPreferencesRepository

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300.0


class PreferenceGate:
    """Answer ``is_push_allowed`` from cached notification preferences.

    Users without stored preferences are allowed every category. Only push
    delivery is gated; in-app records are always written.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractContextManager[Session]],
        *,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session_factory = session_factory
        self._ttl = ttl_seconds
        self._clock = clock
        self._cache: dict[int, tuple[NotificationPreferences, float]] = {}
        self._lock = threading.Lock()

    def is_push_allowed(self, user_id: int, category: NotificationCategory | str) -> bool:
        category = NotificationCategory.parse(category)
        allowed = self._preferences_for(user_id).allows(category)
        if not allowed:
            logger.debug("User %s disabled push for category %s", user_id, category.value)
        return allowed

    def invalidate(self, user_id: int) -> None:
        """Forget the cached preferences of ``user_id``."""

        with self._lock:
            self._cache.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _preferences_for(self, user_id: int) -> NotificationPreferences:
        now = self._clock()
        with self._lock:
            cached = self._cache.get(user_id)
        if cached is not None and now - cached[1] < self._ttl:
            return cached[0]

        with self._session_factory() as session:
            preferences = NotificationPreferencesRepository(session).get_for_user(user_id)
        if preferences is None:
            preferences = NotificationPreferences.default_for(user_id)

        if self._ttl > 0:
            with self._lock:
                self._cache[user_id] = (preferences, now)
        return preferences


__all__ = ["DEFAULT_CACHE_TTL_SECONDS", "PreferenceGate"]
