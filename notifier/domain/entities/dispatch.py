"""Value objects produced while fanning out notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PushOutcome(str, Enum):
    """Classification of a single push provider response."""

    OK = "ok"
    INVALID_TOKEN = "invalid-token"
    TRANSIENT_ERROR = "transient-error"


@dataclass(frozen=True)
class PushMessage:
    """Minimal content submitted to the push provider for one device."""

    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class DispatchResult:
    """Counters describing the outcome of one dispatch call."""

    created: int = 0
    pushed: int = 0
    push_failures: int = 0
    failed_recipients: int = 0
    suppressed: int = 0
    tokens_removed: int = 0


__all__ = ["DispatchResult", "PushMessage", "PushOutcome"]
