"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``translate_providers.base.models_parts``. All models are frozen dataclasses:
adapters keep no per-call state and share nothing mutable across requests.
"""

from .models_parts.adapter_config import AdapterConfig
from .models_parts.stream_chunk import StreamChunk
from .models_parts.token_usage import TokenUsage
from .models_parts.translation_request import TranslationRequest
from .models_parts.translation_response import TranslationResponse

__all__ = [
    "AdapterConfig",
    "StreamChunk",
    "TokenUsage",
    "TranslationRequest",
    "TranslationResponse",
]
