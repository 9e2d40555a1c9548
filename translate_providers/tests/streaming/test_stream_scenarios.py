"""End-to-end stream scenarios: scripted upstream -> adapter -> SSE frames."""
from __future__ import annotations

import json

from translate_providers.base.cancellation import CancellationToken
from translate_providers.base.models import AdapterConfig, TranslationRequest
from translate_providers.base.streaming import FixedPacing, StreamProcessor
from translate_providers.gemini import GeminiOpenAICompatibleAdapter, NativeGeminiAdapter
from translate_providers.openai import OpenAICompatibleAdapter
from translate_providers.tests.helpers import gemini_object, openai_delta, parse_frames

_OPENAI = AdapterConfig(
    api_key="sk-test", base_url="https://api.openai.test/v1", model="gpt-test", max_tokens=256, temperature=0.3
)
_GEMINI = AdapterConfig(
    api_key="g-test",
    base_url="https://generativelanguage.googleapis.test/v1beta",
    model="gemini-test",
    max_tokens=256,
    temperature=0.3,
)


def _contents(events):
    return [e["choices"][0]["delta"]["content"] for e in events if isinstance(e, dict) and e.get("choices") and "content" in e["choices"][0]["delta"]]


def _terminals(events):
    return [e for e in events if isinstance(e, dict) and e.get("choices") and e["choices"][0]["finish_reason"] == "stop"]


def test_openai_deltas_pass_through_in_order(upstream, pacing):
    upstream.queue_sse([openai_delta(p) for p in ("H", "e", "llo", " World", "!")])
    adapter = OpenAICompatibleAdapter(_OPENAI, client=upstream.client(), pacing=pacing)
    events = parse_frames(StreamProcessor().process(adapter, TranslationRequest(text="Bonjour le monde")))
    assert _contents(events) == ["H", "e", "llo", " World", "!"]  # nosec B101
    assert len(_terminals(events)) == 1  # nosec B101
    assert events[-1] == "[DONE]"  # nosec B101
    assert events[-2]["usage"] == {"totalTokens": len("Hello World!")}  # nosec B101
    assert pacing.delays_requested == 0  # nosec B101


def test_gemini_native_two_objects_in_one_read(upstream, pacing):
    body = "[" + json.dumps(gemini_object("Bon")) + ",\r\n" + json.dumps(gemini_object("jour", finish="STOP")) + "]"
    upstream.queue([body])
    adapter = NativeGeminiAdapter(_GEMINI, client=upstream.client(), pacing=pacing)
    events = parse_frames(StreamProcessor().process(adapter, TranslationRequest(text="Hello")))
    assert _contents(events) == ["Bon", "jour"]  # nosec B101
    assert len(_terminals(events)) == 1  # nosec B101
    assert events[-1] == "[DONE]"  # nosec B101
    assert upstream.last_request.url.path.endswith(":streamGenerateContent")  # nosec B101


def test_gemini_native_object_split_across_reads(upstream, pacing):
    first = json.dumps(gemini_object("Grüße "))
    second = json.dumps(gemini_object("aus Berlin", finish="STOP"))
    body = "[" + first + "," + second + "]"
    upstream.queue([body[:9], body[9:40], body[40:]])
    adapter = NativeGeminiAdapter(_GEMINI, client=upstream.client(), pacing=pacing)
    events = parse_frames(StreamProcessor().process(adapter, TranslationRequest(text="Greetings from Berlin")))
    assert "".join(_contents(events)) == "Grüße aus Berlin"  # nosec B101
    assert len(_terminals(events)) == 1  # nosec B101


def test_compat_single_burst_is_simulated(upstream):
    paragraphs = [
        "The committee met on Tuesday to review the proposal in detail, discussing budget, timeline and staffing. " * 2,
        "After a long debate the members agreed to postpone the final vote until more data is available. " * 2,
        "Everyone thanked the chair for keeping the discussion focused and productive throughout the session.",
    ]
    text = "\n\n".join(p.strip() for p in paragraphs)
    assert len(text) > 450  # nosec B101
    upstream.queue_sse([openai_delta(text)])
    pacing = FixedPacing(delay=0.1)
    adapter = GeminiOpenAICompatibleAdapter(_GEMINI, client=upstream.client(), pacing=pacing)
    events = parse_frames(StreamProcessor().process(adapter, TranslationRequest(text="Original")))
    pieces = _contents(events)
    assert len(pieces) == 3  # nosec B101
    assert "".join(pieces) == text  # nosec B101
    assert pacing.delays_requested == 2  # nosec B101
    assert len(_terminals(events)) == 1  # nosec B101
    assert events[-1] == "[DONE]"  # nosec B101
    assert upstream.last_request.url.path.endswith("/openai/chat/completions")  # nosec B101


def test_cancel_mid_stream_closes_upstream(upstream, pacing):
    upstream.queue_sse([openai_delta(str(i)) for i in range(5)])
    adapter = OpenAICompatibleAdapter(_OPENAI, client=upstream.client(), pacing=pacing)
    token = CancellationToken()
    frames = StreamProcessor().process(adapter, TranslationRequest(text="x"), token)
    received = [next(frames), next(frames)]
    token.cancel("client disconnected")
    rest = list(frames)
    assert _contents(parse_frames(received)) == ["0", "1"]  # nosec B101
    assert rest == []  # nosec B101
    assert upstream.streams[0].closed  # nosec B101
    assert upstream.streams[0].served < 6  # nosec B101


def test_upstream_429_yields_single_error_event(upstream, pacing):
    upstream.queue(status=429, json_body={"error": {"message": "Rate limit exceeded", "type": "requests"}})
    adapter = OpenAICompatibleAdapter(_OPENAI, client=upstream.client(), pacing=pacing)
    events = parse_frames(StreamProcessor().process(adapter, TranslationRequest(text="x")))
    assert events == [  # nosec B101
        {"error": {"message": "OpenAI API error: 429 - Rate limit exceeded", "type": "stream_error"}}
    ]
