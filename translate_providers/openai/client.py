"""OpenAI-compatible translation adapter.

Talks to any chat-completions endpoint (OpenAI itself, or a proxy exposing
the same API) over the shared ``httpx`` client.

Streaming
---------
The upstream already frames its output as SSE ``data: {json}`` lines ending
with ``data: [DONE]``. Each ``choices[0].delta.content`` becomes one delta
chunk. The terminal chunk carries the upstream ``usage`` when the upstream
sent one, otherwise a ``total_tokens`` estimate equal to the character count.
A stream that ends without ``[DONE]`` still gets exactly one terminal chunk.

Failure semantics
-----------------
- Non-2xx status: ``UpstreamHTTPError`` (``"OpenAI API error: <status> - <message>"``).
- In-band ``{"error": ...}`` event: ``ProviderError`` with the upstream message.
- Undecodable ``data:`` payloads are logged (``stream.parse_discard``) and skipped.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, Dict, Iterator, Optional

from ..base.adapter import BaseAdapter
from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, log_event
from ..base.models import StreamChunk, TokenUsage, TranslationRequest, TranslationResponse
from ..base.streaming.metrics import StreamMetrics
from ..base.streaming.sse import SSEDecoder
from .helpers import (
    auth_headers,
    build_chat_payload,
    chat_completions_url,
    extract_delta_content,
    extract_message_content,
    extract_stream_error,
    extract_usage,
)


class OpenAICompatibleAdapter(BaseAdapter):
    """Adapter for OpenAI chat-completions style endpoints."""

    provider_name = "openai"
    error_label = "OpenAI"

    def endpoint(self) -> str:
        return chat_completions_url(self.config.base_url)

    def _payload(self, request: TranslationRequest, *, stream: bool) -> Dict[str, Any]:
        return build_chat_payload(
            model=self._resolve_model(request),
            system_message=self.system_instruction(request),
            text=request.text,
            max_tokens=self._resolve_max_tokens(request),
            temperature=self._resolve_temperature(request),
            stream=stream,
        )

    def _translate_once(self, request: TranslationRequest, ctx: LogContext) -> TranslationResponse:
        model = self._resolve_model(request)
        body = self._post_json(
            self.endpoint(), self._payload(request, stream=False), auth_headers(self.config.api_key), model
        )
        content = extract_message_content(body)
        if content is None:
            raise self._format_error("missing choices[0].message.content", model)
        return TranslationResponse(content=content, usage=extract_usage(body))

    def _iter_events(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
    ) -> Iterator[Dict[str, Any]]:
        """Open the SSE stream and yield decoded events until ``[DONE]`` or EOF."""
        model = self._resolve_model(request)
        with self._open_stream(
            self.endpoint(),
            self._payload(request, stream=True),
            auth_headers(self.config.api_key),
            model=model,
            token=token,
        ) as resp:
            decoder = SSEDecoder(ctx=ctx, logger=self._logger)
            for event in decoder.decode(resp.iter_lines()):
                message = extract_stream_error(event)
                if message is not None:
                    raise ProviderError(
                        code=ErrorCode.UNKNOWN,
                        message=f"{self.error_label} API error: {message}",
                        provider=self.provider_name,
                        model=model,
                    )
                yield event

    def _stream_chunks(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> Iterator[StreamChunk]:
        chars = 0
        usage: Optional[TokenUsage] = None
        with closing(self._iter_events(request, token, ctx)) as events:
            for event in events:
                usage = extract_usage(event) or usage
                delta = extract_delta_content(event)
                if not delta:
                    continue
                chars += len(delta)
                log_event(self._logger, "stream.delta", ctx, level=logging.DEBUG, chars=len(delta))
                yield StreamChunk.delta(delta)
        yield StreamChunk.terminal(usage or TokenUsage(total_tokens=chars))


__all__ = ["OpenAICompatibleAdapter"]
