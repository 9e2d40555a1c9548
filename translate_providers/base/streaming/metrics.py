"""Streaming metrics and the consolidated end-of-stream log event.

Every adapter stream owns one :class:`StreamMetrics`; the stream processor
owns another for the downstream side. ``finalize_stream`` emits exactly one
``stream.end``, ``stream.error`` or ``stream.cancelled`` event per stream.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from ..logging import LogContext, normalized_log_event
from ..models import TokenUsage


@dataclass
class StreamMetrics:
    """Collected metrics for a single stream.

    Attributes:
        emitted: Number of non-empty delta chunks produced.
        chars: Total characters across those deltas.
        time_to_first_chunk_ms: Latency from start to the first delta.
        total_duration_ms: Latency from start to finalize.
        real_stream: Reality detector verdict (``None`` when not applicable).
        simulated: Whether the output was produced by the chunk simulator.
        usage: Usage attached to the terminal chunk, if any.
    """

    emitted: int = 0
    chars: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    real_stream: Optional[bool] = None
    simulated: bool = False
    usage: Optional[TokenUsage] = None
    started_at: float = field(default_factory=time.perf_counter)

    def record_delta(self, content: str) -> None:
        if self.emitted == 0:
            self.time_to_first_chunk_ms = (time.perf_counter() - self.started_at) * 1000.0
        self.emitted += 1
        self.chars += len(content)

    def stop(self) -> None:
        self.total_duration_ms = (time.perf_counter() - self.started_at) * 1000.0


def finalize_stream(
    *,
    logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[BaseException] = None,
    error_code: Optional[str] = None,
    cancelled: bool = False,
) -> None:
    """Stop the clock and emit the consolidated end-of-stream event."""
    metrics.stop()
    if cancelled:
        event = "stream.cancelled"
    elif error is not None:
        event = "stream.error"
    else:
        event = "stream.end"
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        emitted=metrics.emitted > 0,
        tokens=metrics.usage.to_dict() if metrics.usage else None,
        error_code=error_code,
        emitted_count=metrics.emitted,
        chars=metrics.chars,
        time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
        total_duration_ms=metrics.total_duration_ms,
        real_stream=metrics.real_stream,
        simulated=metrics.simulated,
        error=str(error) if error is not None else None,
    )


__all__ = ["StreamMetrics", "finalize_stream"]
