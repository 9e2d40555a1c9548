"""Error raised when an upstream body cannot be decoded into the expected shape."""
from __future__ import annotations

from dataclasses import dataclass

from .provider_error import ProviderError


@dataclass
class UpstreamFormatError(ProviderError):
    """Non-streaming response did not match the provider's documented schema."""


UnknownUpstreamFormatError = UpstreamFormatError


__all__ = ["UpstreamFormatError", "UnknownUpstreamFormatError"]
