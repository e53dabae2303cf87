"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from notifier.domain.entities import NotificationCategory


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    category: NotificationCategory
    title: str
    body: str
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime


class NotificationCountRead(BaseModel):
    """Number of notifications affected or matched by an operation."""

    count: int = Field(..., ge=0)


__all__ = ["NotificationCountRead", "NotificationRead"]
