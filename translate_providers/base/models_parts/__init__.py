"""One-class-per-file domain models re-exported by ``base.models``."""

from .adapter_config import AdapterConfig
from .stream_chunk import StreamChunk
from .token_usage import TokenUsage
from .translation_request import TranslationRequest
from .translation_response import TranslationResponse

__all__ = [
    "AdapterConfig",
    "StreamChunk",
    "TokenUsage",
    "TranslationRequest",
    "TranslationResponse",
]
