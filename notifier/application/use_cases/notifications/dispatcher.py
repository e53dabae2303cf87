"""Fan out one notification trigger to in-app records and device pushes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager
from typing import Any

import anyio
from anyio import from_thread, to_thread
from sqlalchemy.orm import Session

from notifier.config import Settings
from notifier.domain.entities import (
    DispatchResult,
    Notification,
    NotificationCategory,
    PushMessage,
    PushOutcome,
    PushToken,
)
from notifier.infrastructure.notifications import PushSender, build_push_message

from .preferences import PreferenceGate
from .registry import PushTokenRegistry
from .store import NotificationStore

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


class NotificationDispatcher:
    """Single entry point used to notify a set of users.

    For every recipient an in-app record is written first; push delivery is
    best effort and gated by the user's preferences. Recipients are processed
    concurrently, as are the devices of a recipient, with store calls and
    provider sends bounded by ``max_concurrency``.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        push_sender: PushSender,
        preference_gate: PreferenceGate,
        deep_link_scheme: str = "theconnection",
        max_concurrency: int = 10,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be positive")
        self._session_factory = session_factory
        self._push_sender = push_sender
        self._preference_gate = preference_gate
        self._deep_link_scheme = deep_link_scheme
        self._max_concurrency = max_concurrency

    @property
    def preference_gate(self) -> PreferenceGate:
        return self._preference_gate

    async def dispatch(
        self,
        category: NotificationCategory | str,
        recipients: Iterable[int],
        payload: Mapping[str, Any] | None = None,
    ) -> DispatchResult:
        """Notify every user in ``recipients`` and return the counters.

        ``None`` entries are ignored; a non-positive id raises ``ValueError``
        before anything is stored.
        """

        category = NotificationCategory.parse(category)
        payload = dict(payload or {})
        unique_recipients = list(dict.fromkeys(r for r in recipients if r is not None))
        invalid = [r for r in unique_recipients if r <= 0]
        if invalid:
            raise ValueError(f"Recipient ids must be positive: {invalid}")
        result = DispatchResult()
        if not unique_recipients:
            return result

        limiter = anyio.CapacityLimiter(self._max_concurrency)
        async with anyio.create_task_group() as task_group:
            for recipient_id in unique_recipients:
                task_group.start_soon(
                    self._deliver, recipient_id, category, payload, result, limiter
                )

        logger.info(
            "Dispatched %s to %s recipient(s): created=%s pushed=%s push_failures=%s "
            "failed_recipients=%s suppressed=%s tokens_removed=%s",
            category.value,
            len(unique_recipients),
            result.created,
            result.pushed,
            result.push_failures,
            result.failed_recipients,
            result.suppressed,
            result.tokens_removed,
        )
        return result

    def dispatch_from_thread(
        self,
        category: NotificationCategory | str,
        recipients: Iterable[int],
        payload: Mapping[str, Any] | None = None,
    ) -> DispatchResult:
        """Run :meth:`dispatch` from a worker thread of the running event loop.

        Synchronous FastAPI handlers execute in such threads.
        """

        return from_thread.run(self.dispatch, category, list(recipients), payload)

    async def _deliver(
        self,
        recipient_id: int,
        category: NotificationCategory,
        payload: dict[str, Any],
        result: DispatchResult,
        limiter: anyio.CapacityLimiter,
    ) -> None:
        try:
            notification = await to_thread.run_sync(
                self._record, recipient_id, category, payload, limiter=limiter
            )
        except Exception:
            logger.exception(
                "Could not store %s notification for user %s", category.value, recipient_id
            )
            result.failed_recipients += 1
            return
        result.created += 1

        try:
            tokens = await to_thread.run_sync(
                self._push_targets, recipient_id, category, limiter=limiter
            )
        except Exception:
            logger.exception(
                "Could not resolve push targets for user %s; notification %s stays in-app only",
                recipient_id,
                notification.id,
            )
            result.push_failures += 1
            return

        if tokens is None:
            result.suppressed += 1
            return
        if not tokens:
            logger.debug("No push tokens for user %s", recipient_id)
            return

        message = build_push_message(notification, scheme=self._deep_link_scheme)
        async with anyio.create_task_group() as task_group:
            for push_token in tokens:
                task_group.start_soon(
                    self._push, push_token, message, result, limiter
                )

    async def _push(
        self,
        push_token: PushToken,
        message: PushMessage,
        result: DispatchResult,
        limiter: anyio.CapacityLimiter,
    ) -> None:
        token = push_token.token
        try:
            async with limiter:
                outcome = await self._push_sender.send(token, message)
        except Exception:
            logger.exception("Push sender raised for user %s", push_token.owner_id)
            outcome = PushOutcome.TRANSIENT_ERROR

        if outcome is PushOutcome.OK:
            result.pushed += 1
            await self._run_token_maintenance(self._touch_token, token, limiter)
        elif outcome is PushOutcome.INVALID_TOKEN:
            if await self._run_token_maintenance(self._remove_invalid_token, token, limiter):
                result.tokens_removed += 1
        else:
            logger.warning(
                "Push delivery to user %s failed (%s); not retried",
                push_token.owner_id,
                push_token.platform.value,
            )
            result.push_failures += 1

    async def _run_token_maintenance(
        self,
        func: Callable[[str], bool],
        token: str,
        limiter: anyio.CapacityLimiter,
    ) -> bool:
        try:
            return await to_thread.run_sync(func, token, limiter=limiter)
        except Exception:
            logger.exception("Push token maintenance failed token_prefix=%s", token[:24])
            return False

    def _record(
        self,
        recipient_id: int,
        category: NotificationCategory,
        payload: dict[str, Any],
    ) -> Notification:
        with self._session_factory() as session:
            return NotificationStore(session).record(recipient_id, category, payload)

    def _push_targets(
        self, recipient_id: int, category: NotificationCategory
    ) -> list[PushToken] | None:
        """Return the tokens to push to, or ``None`` when preferences forbid it."""

        if not self._preference_gate.is_push_allowed(recipient_id, category):
            return None
        with self._session_factory() as session:
            return PushTokenRegistry(session).tokens_for(recipient_id)

    def _remove_invalid_token(self, token: str) -> bool:
        with self._session_factory() as session:
            return PushTokenRegistry(session).remove_invalid(token)

    def _touch_token(self, token: str) -> bool:
        with self._session_factory() as session:
            return PushTokenRegistry(session).touch(token)


def create_dispatcher(
    settings: Settings,
    *,
    session_factory: SessionFactory,
    push_sender: PushSender,
) -> NotificationDispatcher:
    """Build a dispatcher configured from ``settings``."""

    gate = PreferenceGate(
        session_factory, ttl_seconds=settings.preferences_cache_ttl_seconds
    )
    return NotificationDispatcher(
        session_factory=session_factory,
        push_sender=push_sender,
        preference_gate=gate,
        deep_link_scheme=settings.deep_link_scheme,
        max_concurrency=settings.dispatch_concurrency,
    )


__all__ = ["NotificationDispatcher", "SessionFactory", "create_dispatcher"]
