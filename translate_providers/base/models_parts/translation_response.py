"""TranslationResponse returned by non-streaming ``translate`` calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .token_usage import TokenUsage


@dataclass(frozen=True)
class TranslationResponse:
    """Full translated text plus upstream usage when reported."""

    content: str
    usage: Optional[TokenUsage] = None


__all__ = ["TranslationResponse"]
