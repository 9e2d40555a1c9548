"""Client disconnect handling of the streaming route response."""
from __future__ import annotations

import threading
import time

import anyio

from translate_providers.base.cancellation import CancellationToken
from translate_providers.service.translate_stream import TranslationStreamResponse

_SCOPE = {"type": "http", "asgi": {"version": "3.0", "spec_version": "2.3"}, "method": "POST", "headers": []}


def _stalled_frames(token: CancellationToken, state: dict):
    """One frame, then a read that only returns when the upstream is closed."""
    released = threading.Event()
    token.register(released.set)
    try:
        yield b"data: first\n\n"
        state["released"] = released.wait(3.0)
        state["read_returned_at"] = time.monotonic()
        yield b"data: late\n\n"
    finally:
        state["closed"] = True


def _drive(response: TranslationStreamResponse) -> list:
    sent = []

    async def main() -> None:
        gone = anyio.Event()

        async def receive():
            await gone.wait()
            return {"type": "http.disconnect"}

        async def send(message):
            sent.append(message)
            if message["type"] == "http.response.body" and message.get("body"):
                gone.set()

        await response(_SCOPE, receive, send)

    anyio.run(main)
    return sent


def test_disconnect_cancels_token_while_read_is_stalled():
    token = CancellationToken()
    state: dict = {}
    started = time.monotonic()
    sent = _drive(TranslationStreamResponse(_stalled_frames(token, state), token))

    assert state["released"] is True  # nosec B101
    assert state["read_returned_at"] - started < 1.0  # nosec B101
    assert time.monotonic() - started < 1.0  # nosec B101
    assert token.cancelled  # nosec B101
    assert token.reason == "client disconnected"  # nosec B101
    bodies = [m["body"] for m in sent if m["type"] == "http.response.body" and m.get("body")]
    assert bodies[0] == b"data: first\n\n"  # nosec B101
    assert state["closed"] is True  # nosec B101


def test_frames_are_closed_when_the_response_ends():
    token = CancellationToken()
    closed = []

    def frames():
        try:
            yield b"data: only\n\n"
        finally:
            closed.append(True)

    sent = []

    async def main() -> None:
        async def receive():
            await anyio.sleep_forever()

        async def send(message):
            sent.append(message)

        await TranslationStreamResponse(frames(), token)(_SCOPE, receive, send)

    anyio.run(main)
    assert closed == [True]  # nosec B101
    assert token.reason == "response closed"  # nosec B101
    assert sent[-1] == {"type": "http.response.body", "body": b"", "more_body": False}  # nosec B101
