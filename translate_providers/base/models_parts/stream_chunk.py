"""
StreamChunk: the unit every adapter stream yields.

Within one stream exactly one chunk has ``is_complete=True`` and it is the
last one; the content of the chunks before it concatenates to the full
translation. ``usage`` is only ever set on that terminal chunk.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .token_usage import TokenUsage


@dataclass(frozen=True)
class StreamChunk:
    """One incremental piece of a translation stream."""

    content: str
    is_complete: bool = False
    usage: Optional[TokenUsage] = None

    @classmethod
    def delta(cls, content: str) -> "StreamChunk":
        return cls(content=content)

    @classmethod
    def terminal(cls, usage: Optional[TokenUsage] = None) -> "StreamChunk":
        return cls(content="", is_complete=True, usage=usage)


__all__ = ["StreamChunk"]
