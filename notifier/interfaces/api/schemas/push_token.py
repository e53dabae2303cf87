"""Pydantic models for device push token registration."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notifier.application.use_cases.notifications import MAX_TOKEN_LENGTH
from notifier.domain.entities import PushPlatform


class PushTokenCreate(BaseModel):
    """Payload sent by a device after obtaining its push token."""

    token: str = Field(..., min_length=1, max_length=MAX_TOKEN_LENGTH)
    platform: str | None = Field(
        default=None, description="ios, android or anything else for unknown"
    )


class PushTokenRead(BaseModel):
    """Registered device token of the authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    token: str
    platform: PushPlatform
    last_used_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["PushTokenCreate", "PushTokenRead"]
