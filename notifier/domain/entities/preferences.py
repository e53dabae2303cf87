"""Domain entity holding per-category notification opt-ins."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import NotificationCategory


@dataclass
class NotificationPreferences:
    """Push opt-in flags of a user.

    Categories without an explicit flag are allowed.
    """

    owner_id: int
    flags: dict[NotificationCategory, bool] = field(default_factory=dict)

    @classmethod
    def default_for(cls, owner_id: int) -> "NotificationPreferences":
        return cls(owner_id=owner_id)

    def allows(self, category: NotificationCategory) -> bool:
        return self.flags.get(category, True)


__all__ = ["NotificationPreferences"]
