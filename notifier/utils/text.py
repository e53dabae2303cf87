"""Small text helpers used when rendering notification content."""

from __future__ import annotations

_ELLIPSIS = "..."


def truncate_text(text: str | None, max_length: int = 100) -> str:
    """Shorten ``text`` to ``max_length`` characters, ending with an ellipsis."""

    if not text:
        return ""
    if len(text) <= max_length:
        return text
    if max_length <= len(_ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


__all__ = ["truncate_text"]
