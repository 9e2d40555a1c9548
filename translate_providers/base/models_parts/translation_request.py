"""
TranslationRequest DTO: one text to translate plus per-call sampling hints.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TranslationRequest:
    """Normalized translation request passed to adapters.

    Attributes:
        text: Source text; must be non-empty.
        model: Model identifier; adapters fall back to their configured model
            when empty.
        max_tokens: Completion budget; adapters fall back to their config when
            ``None``.
        system_message: Optional replacement for the default translator
            instruction.
        target_language: Language to translate into (default English).
        temperature: Optional per-call override of the configured temperature.
    """

    text: str
    model: str = ""
    max_tokens: Optional[int] = None
    system_message: Optional[str] = None
    target_language: Optional[str] = None
    temperature: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("text must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary (text length only, for logging)."""
        return {
            "text_length": len(self.text),
            "model": self.model,
            "max_tokens": self.max_tokens,
            "target_language": self.target_language,
            "temperature": self.temperature,
            "has_system_message": self.system_message is not None,
        }


__all__ = ["TranslationRequest"]
