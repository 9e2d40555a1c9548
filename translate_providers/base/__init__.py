"""
Translation Base Package

Exports the provider-agnostic contracts every adapter and the stream
processor build on:
- Errors: the normalized taxonomy and classification helpers
- Models: frozen request/response/chunk dataclasses
- Cancellation: cooperative cancellation token and ``AbortError``
- Timeouts: shared ``httpx`` timeout configuration

The adapter base class, the factory and the streaming package are imported
from their own modules (``base.adapter``, ``base.factory``,
``base.streaming``); they depend on ``translate_providers.config``, which in
turn depends on this package.
"""

from .errors import (
    ConfigValidationError,
    ErrorCode,
    ProviderError,
    StreamParseError,
    UnknownUpstreamFormatError,
    UnsupportedProviderError,
    UpstreamFormatError,
    UpstreamHTTPError,
    classify_exception,
)
from .models import (
    AdapterConfig,
    StreamChunk,
    TokenUsage,
    TranslationRequest,
    TranslationResponse,
)
from .cancellation import AbortError, CancellationToken
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors
    "ConfigValidationError",
    "ErrorCode",
    "ProviderError",
    "StreamParseError",
    "UnknownUpstreamFormatError",
    "UnsupportedProviderError",
    "UpstreamFormatError",
    "UpstreamHTTPError",
    "classify_exception",
    # Models
    "AdapterConfig",
    "StreamChunk",
    "TokenUsage",
    "TranslationRequest",
    "TranslationResponse",
    # Cancellation
    "AbortError",
    "CancellationToken",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
