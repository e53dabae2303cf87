"""Registry of the device push tokens owned by each user."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from notifier.domain.entities import PushPlatform, PushToken, TokenRemovalResult
from notifier.infrastructure.repositories import PushTokenRepository
from notifier.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

MAX_TOKEN_LENGTH = 255


class PushTokenRegistry:
    """Register, resolve and remove push tokens.

    A token belongs to a single user; registering it again under another
    user moves it (last writer wins).
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._repository = PushTokenRepository(session)
        self._clock = clock

    def register(
        self, user_id: int, token: str, platform: PushPlatform | str | None = None
    ) -> PushToken:
        token = (token or "").strip()
        if not token:
            raise ValueError("Push token must not be empty")
        if len(token) > MAX_TOKEN_LENGTH:
            raise ValueError(f"Push token must be at most {MAX_TOKEN_LENGTH} characters")

        previous = self._repository.get_by_token(token)
        saved = self._repository.upsert(
            user_id=user_id,
            token=token,
            platform=PushPlatform.normalize(platform),
            seen_at=self._clock(),
        )
        if previous is not None and previous.owner_id != user_id:
            logger.info(
                "Push token reassigned from user %s to user %s", previous.owner_id, user_id
            )
        return saved

    def tokens_for(self, user_id: int) -> list[PushToken]:
        return list(self._repository.list_for_user(user_id))

    def remove(self, token: str, requesting_user_id: int) -> TokenRemovalResult:
        """Delete ``token`` if it belongs to ``requesting_user_id``."""

        existing = self._repository.get_by_token(token)
        if existing is None:
            return TokenRemovalResult.NOT_FOUND
        if existing.owner_id != requesting_user_id:
            return TokenRemovalResult.FORBIDDEN
        if not self._repository.delete(token):
            return TokenRemovalResult.NOT_FOUND
        return TokenRemovalResult.DELETED

    def remove_invalid(self, token: str) -> bool:
        """Delete a token the push provider reported as unregistered."""

        removed = self._repository.delete(token)
        if removed:
            logger.info("Removed invalid push token token_prefix=%s", token[:24])
        return removed

    def touch(self, token: str) -> bool:
        """Refresh ``last_used_at`` after a successful delivery."""

        return self._repository.touch(token, seen_at=self._clock())


__all__ = ["MAX_TOKEN_LENGTH", "PushTokenRegistry"]
