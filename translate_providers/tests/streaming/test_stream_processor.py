"""Stream processor framing tests against in-memory adapters."""
from __future__ import annotations

from types import SimpleNamespace

from translate_providers.base.cancellation import AbortError, CancellationToken
from translate_providers.base.errors import ErrorCode, UpstreamHTTPError
from translate_providers.base.models import StreamChunk, TokenUsage, TranslationRequest, TranslationResponse
from translate_providers.base.streaming import STREAM_HEADERS, StreamProcessor, process_translation
from translate_providers.tests.helpers import parse_frames


class _ScriptedAdapter:
    """Yields scripted chunks; an exception instance in the script is raised."""

    provider_name = "fake"

    def __init__(self, script, response=None):
        self.config = SimpleNamespace(model="fake-model")
        self._script = list(script)
        self._response = response
        self.pulled = 0
        self.closed = False

    def translate_stream(self, request, token=None):
        try:
            for item in self._script:
                if isinstance(item, BaseException):
                    raise item
                self.pulled += 1
                yield item
        finally:
            self.closed = True

    def translate(self, request):
        return self._response


def _request() -> TranslationRequest:
    return TranslationRequest(text="Hello")


def test_deltas_then_one_terminal_and_done():
    usage = TokenUsage(prompt_tokens=2, completion_tokens=3, total_tokens=5)
    adapter = _ScriptedAdapter(
        [StreamChunk.delta("Hol"), StreamChunk.delta(""), StreamChunk.delta("a"), StreamChunk.terminal(usage)]
    )
    events = parse_frames(StreamProcessor().process(adapter, _request()))
    assert [e["choices"][0]["delta"].get("content") for e in events[:2]] == ["Hol", "a"]  # nosec B101
    assert all(e["object"] == "chat.completion.chunk" for e in events[:3])  # nosec B101
    assert events[2]["choices"][0]["finish_reason"] == "stop"  # nosec B101
    assert events[2]["usage"] == {"promptTokens": 2, "completionTokens": 3, "totalTokens": 5}  # nosec B101
    assert events[3] == "[DONE]"  # nosec B101
    assert len(events) == 4  # nosec B101
    assert adapter.closed  # nosec B101


def test_nothing_is_pulled_after_terminal():
    adapter = _ScriptedAdapter([StreamChunk.delta("x"), StreamChunk.terminal(), StreamChunk.delta("late")])
    events = parse_frames(StreamProcessor().process(adapter, _request()))
    assert events[-1] == "[DONE]"  # nosec B101
    assert adapter.pulled == 2  # nosec B101
    assert adapter.closed  # nosec B101


def test_missing_terminal_is_supplied():
    adapter = _ScriptedAdapter([StreamChunk.delta("x")])
    events = parse_frames(StreamProcessor().process(adapter, _request()))
    assert events[1]["choices"][0]["finish_reason"] == "stop"  # nosec B101
    assert "usage" not in events[1]  # nosec B101
    assert events[2] == "[DONE]"  # nosec B101


def test_failure_after_deltas_emits_one_error_and_stops(log_capture):
    err = UpstreamHTTPError(
        code=ErrorCode.RATE_LIMIT, message="OpenAI API error: 429 - slow down", provider="fake", status_code=429
    )
    adapter = _ScriptedAdapter([StreamChunk.delta("a"), err, StreamChunk.delta("never")])
    events = parse_frames(StreamProcessor().process(adapter, _request()))
    assert len(events) == 2  # nosec B101
    assert events[1] == {"error": {"message": "OpenAI API error: 429 - slow down", "type": "stream_error"}}  # nosec B101
    assert adapter.closed  # nosec B101
    logged = [e for e in log_capture.events() if e.get("event") == "stream.error"]
    assert logged and logged[0]["error_code"] == "rate_limit"  # nosec B101


def test_abort_is_silent(log_capture):
    adapter = _ScriptedAdapter([StreamChunk.delta("a"), AbortError("client gone")])
    events = parse_frames(StreamProcessor().process(adapter, _request()))
    assert len(events) == 1  # nosec B101
    assert "error" not in events[0]  # nosec B101
    assert any(e.get("event") == "stream.cancelled" for e in log_capture.events())  # nosec B101


def test_cancelled_token_stops_after_current_frame():
    token = CancellationToken()
    adapter = _ScriptedAdapter([StreamChunk.delta(str(i)) for i in range(5)] + [StreamChunk.terminal()])
    frames = StreamProcessor().process(adapter, _request(), token)
    first = next(frames)
    token.cancel("client gone")
    rest = list(frames)
    assert parse_frames([first])[0]["choices"][0]["delta"]["content"] == "0"  # nosec B101
    assert rest == []  # nosec B101
    assert adapter.closed  # nosec B101


def test_error_after_cancel_is_not_rendered():
    token = CancellationToken()
    token.cancel("client gone")
    adapter = _ScriptedAdapter([RuntimeError("socket closed")])
    assert list(StreamProcessor().process(adapter, _request(), token)) == []  # nosec B101


def test_stream_headers():
    assert STREAM_HEADERS["Content-Type"] == "text/plain; charset=utf-8"  # nosec B101
    assert STREAM_HEADERS["Cache-Control"] == "no-cache"  # nosec B101
    assert STREAM_HEADERS["Connection"] == "keep-alive"  # nosec B101


def test_process_translation_wraps_completion():
    adapter = _ScriptedAdapter([], response=TranslationResponse(content="Hola", usage=TokenUsage(total_tokens=4)))
    payload = process_translation(adapter, _request())
    assert payload["object"] == "chat.completion"  # nosec B101
    assert payload["id"].startswith("chatcmpl-")  # nosec B101
    assert payload["model"] == "fake-model"  # nosec B101
    assert payload["choices"][0]["message"] == {"role": "assistant", "content": "Hola"}  # nosec B101
    assert payload["usage"] == {"totalTokens": 4}  # nosec B101
