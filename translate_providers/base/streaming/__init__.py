"""Streaming package for the translation layer.

Exposes the incremental parsers, the reality detector, the chunk simulator,
metrics and the downstream stream processor under a single namespace.
"""

from .json_object_parser import JsonObjectStreamParser, ScanState
from .sse import DONE_SENTINEL, SSE_DONE_FRAME, SSEDecoder, format_sse, sse_data
from .pacing import ChunkPacing, FixedPacing, RandomPacing
from .simulator import intelligent_chunk, simulate_stream
from .reality import StreamRealityDetector
from .metrics import StreamMetrics, finalize_stream
from .frames import completion_payload, delta_event, error_event, terminal_event
from .stream_processor import STREAM_HEADERS, StreamProcessor, process_translation

__all__ = [
    "JsonObjectStreamParser",
    "ScanState",
    "DONE_SENTINEL",
    "SSE_DONE_FRAME",
    "SSEDecoder",
    "format_sse",
    "sse_data",
    "ChunkPacing",
    "FixedPacing",
    "RandomPacing",
    "intelligent_chunk",
    "simulate_stream",
    "StreamRealityDetector",
    "StreamMetrics",
    "finalize_stream",
    "completion_payload",
    "delta_event",
    "error_event",
    "terminal_event",
    "STREAM_HEADERS",
    "StreamProcessor",
    "process_translation",
]
