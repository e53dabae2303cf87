"""Domain entity describing a registered device push token."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PushPlatform(str, Enum):
    """Device platform a push token was issued for."""

    IOS = "ios"
    ANDROID = "android"
    UNKNOWN = "unknown"

    @classmethod
    def normalize(cls, value: "PushPlatform | str | None") -> "PushPlatform":
        """Map free-form client input to a platform, defaulting to ``unknown``."""

        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass
class PushToken:
    """A device endpoint owned by exactly one user."""

    token: str
    owner_id: int
    platform: PushPlatform
    last_used_at: datetime | None = None
    created_at: datetime | None = None


class TokenRemovalResult(str, Enum):
    """Outcome of an ownership-checked token removal."""

    DELETED = "deleted"
    NOT_FOUND = "not-found"
    FORBIDDEN = "forbidden"


__all__ = ["PushPlatform", "PushToken", "TokenRemovalResult"]
