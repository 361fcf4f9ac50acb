"""Utility functions for formatting Discord messages."""

from __future__ import annotations

from typing import Final

MESSAGE_CONTENT_LIMIT: Final[int] = 2000
EMBED_TITLE_LIMIT: Final[int] = 256
ELLIPSIS: Final[str] = "…"


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, marking the cut with an ellipsis."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS
