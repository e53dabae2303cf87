"""Persistence helpers for device push tokens."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifier.domain.entities import PushPlatform, PushToken
from notifier.infrastructure.models import PushTokenModel
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class PushTokenRepository:
    """Provide storage operations for :class:`PushToken` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_token(self, token: str) -> PushToken | None:
        model = self._get_model(token)
        return self._to_entity(model) if model is not None else None

    def list_for_user(self, user_id: int) -> Sequence[PushToken]:
        query = (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.user_id == user_id)
            .order_by(PushTokenModel.last_used_at.desc(), PushTokenModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(
        self,
        *,
        user_id: int,
        token: str,
        platform: PushPlatform,
        seen_at: datetime,
    ) -> PushToken:
        """Insert ``token`` or move an existing row to ``user_id``."""

        naive_seen_at = ensure_app_naive_datetime(seen_at)
        model = self._get_model(token)
        if model is None:
            model = PushTokenModel(
                token=token,
                user_id=user_id,
                platform=platform.value,
                created_at=naive_seen_at,
                last_used_at=naive_seen_at,
            )
            self.session.add(model)
            try:
                self.session.commit()
            except IntegrityError:
                # Another registration inserted the same token first.
                self.session.rollback()
                model = self._get_model(token)
                if model is None:
                    raise
                self._reassign(model, user_id, platform, naive_seen_at)
        else:
            self._reassign(model, user_id, platform, naive_seen_at)
        self.session.refresh(model)
        return self._to_entity(model)

    def touch(self, token: str, *, seen_at: datetime) -> bool:
        updated = (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.token == token)
            .update(
                {PushTokenModel.last_used_at: ensure_app_naive_datetime(seen_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def delete(self, token: str) -> bool:
        deleted = (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.token == token)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def _get_model(self, token: str) -> PushTokenModel | None:
        return (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.token == token)
            .one_or_none()
        )

    def _reassign(
        self,
        model: PushTokenModel,
        user_id: int,
        platform: PushPlatform,
        seen_at: datetime | None,
    ) -> None:
        model.user_id = user_id
        model.platform = platform.value
        model.last_used_at = seen_at
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: PushTokenModel) -> PushToken:
        return PushToken(
            token=model.token,
            owner_id=model.user_id,
            platform=PushPlatform.normalize(model.platform),
            last_used_at=ensure_app_timezone(model.last_used_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["PushTokenRepository"]
