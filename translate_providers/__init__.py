"""translate_providers package

Streaming translation protocol adapter layer.

Purpose:
    Turn one translation request into either a full translation or a
    well-formed stream of OpenAI-style ``chat.completion.chunk`` events,
    regardless of how the upstream (OpenAI-compatible SSE, native Gemini
    concatenated JSON, or Gemini's OpenAI-compatible surface) frames its
    output.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`ConfigValidationError`, :class:`UnsupportedProviderError`,
      :class:`UpstreamHTTPError`, :class:`AbortError`
    - Models: :class:`TranslationRequest`, :class:`StreamChunk`
    - Factory: :class:`AdapterFactory`, :func:`create_adapter`
    - Streaming: :class:`StreamProcessor`, :func:`process_translation`
    - Config: :func:`build_provider_config`
"""

from .base.errors import (
    ConfigValidationError,
    ErrorCode,
    ProviderError,
    UnsupportedProviderError,
    UpstreamHTTPError,
)
from .base.cancellation import AbortError, CancellationToken
from .base.dto import ProviderConfig
from .base.models import StreamChunk, TranslationRequest, TranslationResponse
from .base.factory import AdapterFactory, create_adapter
from .base.streaming import StreamProcessor, process_translation
from .config import build_provider_config

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigValidationError",
    "ErrorCode",
    "ProviderError",
    "UnsupportedProviderError",
    "UpstreamHTTPError",
    "AbortError",
    "CancellationToken",
    "ProviderConfig",
    "StreamChunk",
    "TranslationRequest",
    "TranslationResponse",
    "AdapterFactory",
    "create_adapter",
    "StreamProcessor",
    "process_translation",
    "build_provider_config",
]
