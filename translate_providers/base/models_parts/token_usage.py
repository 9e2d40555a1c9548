"""
TokenUsage value object attached to responses and terminal stream chunks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting reported by an upstream (or estimated by the simulator).

    Attributes:
        prompt_tokens: Tokens consumed by the prompt, when reported.
        completion_tokens: Tokens generated, when reported.
        total_tokens: Total tokens, when reported or estimated.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_dict(self) -> Dict[str, int]:
        """Return the downstream (camelCase) mapping holding only known counts."""
        out: Dict[str, int] = {}
        if self.prompt_tokens is not None:
            out["promptTokens"] = self.prompt_tokens
        if self.completion_tokens is not None:
            out["completionTokens"] = self.completion_tokens
        if self.total_tokens is not None:
            out["totalTokens"] = self.total_tokens
        return out

    @classmethod
    def from_openai(cls, usage: Optional[Mapping[str, Any]]) -> Optional["TokenUsage"]:
        """Build from an OpenAI ``usage`` object (``None`` when absent)."""
        if not isinstance(usage, Mapping):
            return None
        return cls(
            prompt_tokens=_as_int(usage.get("prompt_tokens")),
            completion_tokens=_as_int(usage.get("completion_tokens")),
            total_tokens=_as_int(usage.get("total_tokens")),
        )

    @classmethod
    def from_gemini(cls, metadata: Optional[Mapping[str, Any]]) -> Optional["TokenUsage"]:
        """Build from a Gemini ``usageMetadata`` object (``None`` when absent)."""
        if not isinstance(metadata, Mapping):
            return None
        return cls(
            prompt_tokens=_as_int(metadata.get("promptTokenCount")),
            completion_tokens=_as_int(metadata.get("candidatesTokenCount")),
            total_tokens=_as_int(metadata.get("totalTokenCount")),
        )


def _as_int(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


__all__ = ["TokenUsage"]
