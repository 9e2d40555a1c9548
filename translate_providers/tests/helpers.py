"""Test doubles shared across the suite.

``FakeUpstream`` scripts the upstream API behind ``httpx.MockTransport``;
bodies are delivered as explicit byte chunks so each chunk is one network
read, and ``ChunkedStream.close`` is recorded so tests can assert that the
upstream response was released.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

import httpx

Chunk = Union[str, bytes]


class ChunkedStream(httpx.SyncByteStream):
    """Response body yielding one scripted chunk per read; records ``close``."""

    def __init__(self, chunks: Iterable[Chunk]) -> None:
        self._chunks = [c.encode("utf-8") if isinstance(c, str) else c for c in chunks]
        self.served = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            if self.closed:
                return
            self.served += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


class FakeUpstream:
    """Scripted upstream: queue responses, then hand ``client()`` to an adapter."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.streams: List[ChunkedStream] = []
        self._responses: List[Dict[str, Any]] = []

    def queue(
        self,
        chunks: Sequence[Chunk] = (),
        *,
        status: int = 200,
        json_body: Any = None,
    ) -> None:
        self._responses.append({"chunks": list(chunks), "status": status, "json": json_body})

    def queue_sse(self, events: Sequence[Any], *, done: bool = True) -> None:
        """Queue an SSE body with one ``data:`` line per read."""
        chunks: List[Chunk] = [f"data: {json.dumps(e)}\n\n" for e in events]
        if done:
            chunks.append("data: [DONE]\n\n")
        self.queue(chunks)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        scripted = self._responses.pop(0) if self._responses else {"chunks": [], "status": 200, "json": None}
        if scripted["json"] is not None:
            return httpx.Response(scripted["status"], json=scripted["json"])
        stream = ChunkedStream(scripted["chunks"])
        self.streams.append(stream)
        return httpx.Response(scripted["status"], stream=stream)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def openai_delta(content: Optional[str]) -> Dict[str, Any]:
    delta = {} if content is None else {"content": content}
    return {"choices": [{"delta": delta, "index": 0, "finish_reason": None}]}


def gemini_object(text: str, finish: Optional[str] = None) -> Dict[str, Any]:
    candidate: Dict[str, Any] = {"content": {"parts": [{"text": text}], "role": "model"}}
    if finish:
        candidate["finishReason"] = finish
    return {"candidates": [candidate]}


def parse_frames(frames: Iterable[bytes]) -> List[Any]:
    """Decode downstream SSE frames into JSON events (``"[DONE]"`` kept as a string)."""
    events: List[Any] = []
    for frame in frames:
        text = frame.decode("utf-8")
        for block in text.split("\n\n"):
            if not block.startswith("data: "):
                continue
            payload = block[len("data: "):]
            events.append(payload if payload == "[DONE]" else json.loads(payload))
    return events


