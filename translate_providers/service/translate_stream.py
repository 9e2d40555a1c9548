"""
FastAPI streaming translation route.

Purpose
-------
Expose ``/api/translate/stream`` as an SSE endpoint emitting OpenAI-style
``chat.completion.chunk`` events, reusing the body DTO, adapter resolution
and ``StreamProcessor`` without duplicating logic in the service layer.

Concurrency
-----------
The processor is a synchronous generator (blocking ``httpx`` reads, simulator
pauses); Starlette's ``iterate_in_threadpool`` drives it off the event loop.
Each request owns a ``CancellationToken``. A watcher task listens for
``http.disconnect`` next to the response and cancels the token as soon as the
client goes away, which closes the in-flight upstream response so a blocked
read returns. The response ending for any reason also cancels it.

Fallback semantics
------------------
Errors before streaming starts use the JSON status mapping of
``service.app``. Once streaming has started, failures become a single
``stream_error`` event emitted by the processor.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Iterator

import anyio
from fastapi import Body, HTTPException
from fastapi.responses import StreamingResponse
from starlette.concurrency import iterate_in_threadpool
from starlette.types import Receive, Scope, Send

from translate_providers.base.cancellation import CancellationToken
from translate_providers.base.errors import ConfigValidationError, UnsupportedProviderError
from translate_providers.base.streaming import STREAM_HEADERS, StreamProcessor
from translate_providers.service.app import app, validate_body
from translate_providers.service.helpers import (
    ServerNotConfiguredError,
    prepare_translation,
    server_not_configured_response,
)


async def _relay(frames: Iterator[bytes], token: CancellationToken) -> AsyncIterator[bytes]:
    """Forward processor frames from the worker thread."""
    try:
        async for frame in iterate_in_threadpool(frames):
            yield frame
    finally:
        token.cancel("response closed")
        # the in-flight pull has returned by now, so the generator is idle
        frames.close()


async def _watch_disconnect(receive: Receive, token: CancellationToken) -> None:
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            token.cancel("client disconnected")
            return


class TranslationStreamResponse(StreamingResponse):
    """``StreamingResponse`` that cancels ``token`` the moment the client leaves."""

    def __init__(self, frames: Iterator[bytes], token: CancellationToken, **kwargs: Any) -> None:
        super().__init__(_relay(frames, token), **kwargs)
        self.token = token

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(_watch_disconnect, receive, self.token)
            try:
                await super().__call__(scope, receive, send)
            finally:
                self.token.cancel("response closed")
                task_group.cancel_scope.cancel()


@app.post("/api/translate/stream")
def post_translate_stream(raw: Dict[str, Any] = Body(...)):
    """Stream a translation as SSE frames.

    Behavior:
        - Validates the body strictly (400 on validation error).
        - Resolves credentials and the adapter (400 on configuration errors,
          200 ``SERVER_NOT_CONFIGURED`` when server mode has no key).
        - Streams ``StreamProcessor.process`` output with the stream headers.
    """
    body = validate_body(raw)
    try:
        adapter, translation = prepare_translation(body)
    except ServerNotConfiguredError:
        return server_not_configured_response()
    except (ConfigValidationError, UnsupportedProviderError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    token = CancellationToken()
    frames = StreamProcessor().process(adapter, translation, token)
    return TranslationStreamResponse(frames, token, headers=STREAM_HEADERS)
