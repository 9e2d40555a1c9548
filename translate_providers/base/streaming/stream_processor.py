"""Stream processor: adapter chunks to downstream SSE frames.

The processor pulls ``StreamChunk`` objects from an adapter and yields the
bytes written to the client:

- every non-empty delta becomes one ``chat.completion.chunk`` event;
- the terminal chunk becomes one ``finish_reason: "stop"`` event followed by
  ``data: [DONE]``, after which nothing more is pulled;
- any failure while pulling becomes exactly one error event and the stream
  ends; nothing is emitted after it;
- cancellation ends the stream silently.

The adapter generator is always closed on exit, which in turn closes the
upstream HTTP response.
"""
from __future__ import annotations

from contextlib import closing
from typing import Any, Dict, Iterator, Optional

from ..cancellation import AbortError, CancellationToken
from ..errors import classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import TranslationRequest
from .frames import completion_payload, delta_event, error_event, terminal_event
from .sse import SSE_DONE_FRAME, format_sse

STREAM_HEADERS: Dict[str, str] = {
    "Content-Type": "text/plain; charset=utf-8",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class StreamProcessor:
    """Turns an adapter stream into framed downstream bytes."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_logger("translate_providers.streaming.processor")

    def process(
        self,
        adapter,
        request: TranslationRequest,
        token: Optional[CancellationToken] = None,
    ) -> Iterator[bytes]:
        model = request.model or adapter.config.model
        ctx = LogContext(provider=adapter.provider_name, model=model)
        frames = 0
        try:
            if token is not None:
                token.raise_if_cancelled()
            with closing(adapter.translate_stream(request, token)) as chunks:
                for chunk in chunks:
                    if chunk.is_complete:
                        yield format_sse(terminal_event(model, chunk.usage))
                        yield SSE_DONE_FRAME
                        return
                    if not chunk.content:
                        continue
                    frames += 1
                    yield format_sse(delta_event(chunk.content, model))
                    if token is not None:
                        token.raise_if_cancelled()
            yield format_sse(terminal_event(model))
            yield SSE_DONE_FRAME
        except AbortError:
            self._log_cancelled(ctx, frames)
        except Exception as exc:
            if token is not None and token.cancelled:
                self._log_cancelled(ctx, frames)
                return
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="finalize",
                emitted=frames > 0,
                tokens=None,
                error_code=classify_exception(exc).value,
                error=str(exc),
                frames=frames,
            )
            yield format_sse(error_event(str(exc) or exc.__class__.__name__))

    def _log_cancelled(self, ctx: LogContext, frames: int) -> None:
        normalized_log_event(
            self._logger,
            "stream.cancelled",
            ctx,
            phase="finalize",
            emitted=frames > 0,
            tokens=None,
            frames=frames,
        )


def process_translation(adapter, request: TranslationRequest) -> Dict[str, Any]:
    """Run a non-streaming translation and wrap it as a ``chat.completion``."""
    response = adapter.translate(request)
    return completion_payload(response.content, request.model or adapter.config.model, response.usage)


__all__ = ["StreamProcessor", "process_translation", "STREAM_HEADERS"]
