"""Gemini adapter over Google's OpenAI-compatible endpoint.

Same request and SSE shape as :class:`OpenAICompatibleAdapter`, against
``{base_url}/openai/chat/completions``. This endpoint sometimes answers a
``stream: true`` request with the entire translation in one SSE line, so the
deltas go through :class:`StreamRealityDetector`:

- deltas that prove the upstream is really streaming are emitted as they come;
- text the detector still holds at ``[DONE]`` (or EOF) was delivered in one
  burst and is replayed through the chunk simulator.

Either way the stream ends with exactly one terminal chunk.
"""

from __future__ import annotations

import logging
import time
from contextlib import closing
from typing import Callable, Iterator, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.logging import LogContext, log_event, normalized_log_event
from ..base.models import AdapterConfig, StreamChunk, TokenUsage, TranslationRequest
from ..base.streaming.metrics import StreamMetrics
from ..base.streaming.pacing import ChunkPacing
from ..base.streaming.reality import StreamRealityDetector
from ..base.streaming.simulator import simulate_stream
from ..config.defaults import REAL_STREAM_THRESHOLD_MS
from ..openai.client import OpenAICompatibleAdapter
from ..openai.helpers import extract_delta_content, extract_usage
from .helpers import openai_compatible_base


class GeminiOpenAICompatibleAdapter(OpenAICompatibleAdapter):
    """Gemini through ``/openai/chat/completions`` with reality detection."""

    provider_name = "gemini"
    error_label = "Gemini OpenAI"

    def __init__(
        self,
        config: AdapterConfig,
        *,
        client: Optional[httpx.Client] = None,
        pacing: Optional[ChunkPacing] = None,
        logger=None,
        clock: Callable[[], float] = time.monotonic,
        threshold_ms: float = REAL_STREAM_THRESHOLD_MS,
    ) -> None:
        super().__init__(config, client=client, pacing=pacing, logger=logger)
        self._clock = clock
        self._threshold_ms = threshold_ms

    def endpoint(self) -> str:
        return f"{openai_compatible_base(self.config.base_url)}/chat/completions"

    def _stream_chunks(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> Iterator[StreamChunk]:
        detector = StreamRealityDetector(self._threshold_ms, clock=self._clock)
        chars = 0
        usage: Optional[TokenUsage] = None
        with closing(self._iter_events(request, token, ctx)) as events:
            for event in events:
                usage = extract_usage(event) or usage
                delta = extract_delta_content(event)
                if not delta:
                    continue
                chars += len(delta)
                for piece in detector.observe(delta):
                    log_event(self._logger, "stream.delta", ctx, level=logging.DEBUG, chars=len(piece))
                    yield StreamChunk.delta(piece)
        metrics.real_stream = detector.is_real_stream
        held = detector.drain()
        if held:
            metrics.simulated = True
            normalized_log_event(
                self._logger,
                "stream.simulated",
                ctx,
                phase="simulate",
                emitted=False,
                tokens=None,
                chars=len(held),
                deltas_seen=detector.deltas_seen,
            )
            yield from simulate_stream(
                held, pacing=self.pacing, token=token, usage=usage or TokenUsage(total_tokens=chars)
            )
            return
        yield StreamChunk.terminal(usage or TokenUsage(total_tokens=chars))


__all__ = ["GeminiOpenAICompatibleAdapter"]
