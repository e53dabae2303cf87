"""Endpoints backing the notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    NotificationStore,
)
from notifier.domain.entities import MarkReadResult
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import get_current_user_id
from notifier.interfaces.api.schemas import NotificationCountRead, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    before_id: int | None = Query(
        None, ge=1, description="Only return notifications older than this id"
    ),
    unread_only: bool = False,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[NotificationRead]:
    """Return the notifications of the authenticated user, newest first."""

    notifications = NotificationStore(db).list_for_user(
        user_id, limit=limit, before_id=before_id, unread_only=unread_only
    )
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.get("/unread-count", response_model=NotificationCountRead)
def unread_count(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> NotificationCountRead:
    return NotificationCountRead(count=NotificationStore(db).unread_count(user_id))


@router.post("/read-all", response_model=NotificationCountRead)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> NotificationCountRead:
    """Mark every unread notification of the user as read."""

    return NotificationCountRead(count=NotificationStore(db).mark_all_read(user_id))


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Response:
    """Mark one notification as read; only its recipient may do so."""

    result = NotificationStore(db).mark_read(notification_id, user_id)
    if result is MarkReadResult.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    if result is MarkReadResult.FORBIDDEN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Notification belongs to another user",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
