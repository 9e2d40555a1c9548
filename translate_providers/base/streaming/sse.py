"""Server-sent-event helpers for OpenAI-style upstreams and downstream framing.

Upstream side: :class:`SSEDecoder` turns ``httpx.Response.iter_lines()``
output into decoded JSON payloads, stopping at the ``[DONE]`` sentinel.
Lines that are not ``data:`` fields (comments, ``event:``, blank separators)
are skipped; payloads that fail to decode are logged and skipped.

Downstream side: :func:`format_sse` frames one JSON event as
``data: <json>\\n\\n`` and :data:`SSE_DONE_FRAME` is the end sentinel.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, Optional

from ..errors import StreamParseError, decode_json_fragment
from ..logging import LogContext, get_logger, normalized_log_event

DONE_SENTINEL = "[DONE]"
SSE_DONE_FRAME = b"data: [DONE]\n\n"


def sse_data(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, or ``None`` for any other line."""
    if not line.startswith("data:"):
        return None
    payload = line[5:]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload.strip()


def format_sse(event: Dict[str, Any]) -> bytes:
    """Frame one JSON event for the downstream wire."""
    return b"data: " + json.dumps(event, ensure_ascii=False, separators=(",", ":")).encode("utf-8") + b"\n\n"


class SSEDecoder:
    """Decode an upstream SSE line stream into JSON objects.

    Attributes:
        done: ``True`` once the ``[DONE]`` sentinel has been seen.
        discarded: Number of ``data:`` payloads dropped as undecodable.
    """

    def __init__(self, *, ctx: Optional[LogContext] = None, logger=None) -> None:
        self.done = False
        self.discarded = 0
        self._ctx = ctx
        self._logger = logger or get_logger("translate_providers.streaming.sse")

    def decode(self, lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
        for line in lines:
            payload = sse_data(line)
            if not payload:
                continue
            if payload == DONE_SENTINEL:
                self.done = True
                return
            try:
                yield decode_json_fragment(payload)
            except StreamParseError as exc:
                self.discarded += 1
                normalized_log_event(
                    self._logger,
                    "stream.parse_discard",
                    self._ctx,
                    phase="parse",
                    emitted=None,
                    tokens=None,
                    error=str(exc),
                    fragment=exc.fragment,
                )


__all__ = ["SSEDecoder", "sse_data", "format_sse", "DONE_SENTINEL", "SSE_DONE_FRAME"]
