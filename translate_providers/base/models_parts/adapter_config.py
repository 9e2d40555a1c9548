"""
AdapterConfig: the immutable connection settings owned by one adapter.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AdapterConfig:
    """Settings an adapter is constructed with; never mutated afterwards.

    Attributes:
        api_key: Credential sent to the upstream.
        base_url: Provider base URL (path suffixes are appended per adapter).
        model: Default model identifier.
        max_tokens: Completion budget, strictly positive.
        temperature: Sampling temperature in ``[0, 2]``.
    """

    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float

    def __repr__(self) -> str:  # keep credentials out of logs and tracebacks
        return (
            f"AdapterConfig(base_url={self.base_url!r}, model={self.model!r}, "
            f"max_tokens={self.max_tokens}, temperature={self.temperature})"
        )


__all__ = ["AdapterConfig"]
