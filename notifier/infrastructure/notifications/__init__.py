"""Push delivery helpers for the infrastructure layer."""

from .messages import (
    PUSH_BODY_MAX_LENGTH,
    build_deep_link,
    build_push_message,
    render_content,
)
from .push import ExpoPushSender, NullPushSender, PushSender, create_push_sender

__all__ = [
    "PUSH_BODY_MAX_LENGTH",
    "build_deep_link",
    "build_push_message",
    "render_content",
    "ExpoPushSender",
    "NullPushSender",
    "PushSender",
    "create_push_sender",
]
