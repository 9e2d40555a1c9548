"""Native Gemini translation adapter.

Uses the ``generateContent`` REST surface directly over ``httpx`` (no SDK),
because the streaming body is not SSE: ``streamGenerateContent`` writes whole
JSON objects back to back, optionally inside array framing, and one network
read may hold several objects or a fraction of one.

Streaming
---------
Every decoded read is fed to :class:`JsonObjectStreamParser`. For each parsed
object ``candidates[0].content.parts[0].text`` is a delta and a
``finishReason`` ends the stream. When the completing object arrives before
any delta was emitted, the whole text is handed to the chunk simulator
instead, so the client still sees incremental output.

An upstream that closes without a ``finishReason`` still yields exactly one
terminal chunk; any incomplete trailing object is logged and dropped.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..base.adapter import BaseAdapter
from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, log_event, normalized_log_event
from ..base.models import StreamChunk, TokenUsage, TranslationRequest, TranslationResponse
from ..base.streaming.json_object_parser import JsonObjectStreamParser
from ..base.streaming.metrics import StreamMetrics
from ..base.streaming.simulator import simulate_stream
from .helpers import (
    build_native_payload,
    extract_finish_reason,
    extract_text,
    extract_usage,
    native_headers,
    native_url,
)


class NativeGeminiAdapter(BaseAdapter):
    """Adapter for the native Gemini ``generateContent`` endpoints."""

    provider_name = "gemini"
    error_label = "Gemini"

    def _payload(self, request: TranslationRequest) -> Dict[str, Any]:
        return build_native_payload(
            prompt=self.build_translation_prompt(request.text, request.system_message, request.target_language),
            max_tokens=self._resolve_max_tokens(request),
            temperature=self._resolve_temperature(request),
        )

    def _translate_once(self, request: TranslationRequest, ctx: LogContext) -> TranslationResponse:
        model = self._resolve_model(request)
        body = self._post_json(
            native_url(self.config.base_url, model, stream=False),
            self._payload(request),
            native_headers(self.config.api_key),
            model,
        )
        self._raise_on_error(body, model)
        if not isinstance(body.get("candidates"), list):
            raise self._format_error("missing candidates", model)
        return TranslationResponse(content=extract_text(body), usage=extract_usage(body))

    def _raise_on_error(self, obj: Mapping[str, Any], model: str) -> None:
        err = obj.get("error")
        if err is None:
            return
        message = err.get("message") if isinstance(err, Mapping) else str(err)
        raise ProviderError(
            code=ErrorCode.UNKNOWN,
            message=f"{self.error_label} API error: {message or 'Unknown error'}",
            provider=self.provider_name,
            model=model,
        )

    def _iter_objects(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
    ) -> Iterator[Dict[str, Any]]:
        """Yield every JSON object of the native stream, read by read."""
        model = self._resolve_model(request)
        parser = JsonObjectStreamParser(ctx=ctx, logger=self._logger)
        with self._open_stream(
            native_url(self.config.base_url, model, stream=True),
            self._payload(request),
            native_headers(self.config.api_key),
            model=model,
            token=token,
        ) as resp:
            for text in resp.iter_text():
                for obj in parser.feed(text):
                    self._raise_on_error(obj, model)
                    yield obj
        tail = parser.close()
        if tail.strip():
            normalized_log_event(
                self._logger,
                "stream.parse_discard",
                ctx,
                phase="parse",
                emitted=None,
                tokens=None,
                error="stream ended inside an object",
                fragment=tail[:200],
            )

    def _stream_chunks(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> Iterator[StreamChunk]:
        parts: List[str] = []
        emitted = False
        finished = False
        usage: Optional[TokenUsage] = None
        with closing(self._iter_objects(request, token, ctx)) as objects:
            for obj in objects:
                usage = extract_usage(obj) or usage
                delta = extract_text(obj)
                finished = extract_finish_reason(obj) is not None
                if delta:
                    parts.append(delta)
                if finished and not emitted:
                    break
                if delta:
                    emitted = True
                    log_event(self._logger, "stream.delta", ctx, level=logging.DEBUG, chars=len(delta))
                    yield StreamChunk.delta(delta)
                if finished:
                    break
        full_text = "".join(parts)
        if finished and not emitted and full_text:
            metrics.simulated = True
            normalized_log_event(
                self._logger,
                "stream.simulated",
                ctx,
                phase="simulate",
                emitted=False,
                tokens=None,
                chars=len(full_text),
            )
            yield from simulate_stream(full_text, pacing=self.pacing, token=token, usage=usage)
            return
        yield StreamChunk.terminal(usage or TokenUsage(total_tokens=len(full_text)))


__all__ = ["NativeGeminiAdapter"]
