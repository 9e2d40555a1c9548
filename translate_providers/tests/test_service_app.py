"""HTTP service tests (FastAPI TestClient over a scripted upstream)."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from translate_providers.base.http import set_httpx_client
from translate_providers.service.app import app
from translate_providers.tests.helpers import openai_delta, parse_frames


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def server_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-server")


def _route(upstream, provider="openai"):
    set_httpx_client(f"{provider}.chat", upstream.client())
    set_httpx_client(f"{provider}.stream", upstream.client())


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200  # nosec B101
    assert resp.json() == {"ok": True}  # nosec B101


def test_translate_server_side(client, server_key, upstream):
    _route(upstream)
    upstream.queue(json_body={"choices": [{"message": {"content": "Hola"}}], "usage": {"total_tokens": 8}})
    resp = client.post("/api/translate", json={"text": "Hello", "targetLanguage": "Spanish", "maxTokens": 50})
    assert resp.status_code == 200  # nosec B101
    payload = resp.json()
    assert payload["object"] == "chat.completion"  # nosec B101
    assert payload["choices"][0]["message"]["content"] == "Hola"  # nosec B101
    assert payload["usage"] == {"totalTokens": 8}  # nosec B101
    assert upstream.last_request.headers["Authorization"] == "Bearer sk-server"  # nosec B101
    assert upstream.last_json["max_tokens"] == 50  # nosec B101


def test_translate_client_mode_uses_user_credentials(client, upstream):
    _route(upstream)
    upstream.queue(json_body={"choices": [{"message": {"content": "Salut"}}]})
    resp = client.post(
        "/api/translate",
        json={
            "text": "Hi",
            "useServerSide": False,
            "userConfig": {"apiKey": "sk-user", "baseURL": "https://proxy.example"},
            "model": "gpt-user",
        },
    )
    assert resp.status_code == 200  # nosec B101
    assert str(upstream.last_request.url) == "https://proxy.example/v1/chat/completions"  # nosec B101
    assert upstream.last_request.headers["Authorization"] == "Bearer sk-user"  # nosec B101
    assert resp.json()["model"] == "gpt-user"  # nosec B101


def test_server_not_configured(client):
    resp = client.post("/api/translate", json={"text": "Hello"})
    assert resp.status_code == 200  # nosec B101
    assert resp.json()["code"] == "SERVER_NOT_CONFIGURED"  # nosec B101


def test_stream_server_not_configured(client):
    resp = client.post("/api/translate/stream", json={"text": "Hello", "provider": "gemini"})
    assert resp.status_code == 200  # nosec B101
    assert resp.json()["code"] == "SERVER_NOT_CONFIGURED"  # nosec B101


@pytest.mark.parametrize(
    "body",
    [
        {"text": ""},
        {"text": "Hello", "temperature": 3},
        {"text": "Hello", "maxTokens": 0},
        {"provider": "openai"},
    ],
)
def test_invalid_body_is_rejected(client, body):
    assert client.post("/api/translate", json=body).status_code == 400  # nosec B101


def test_client_mode_without_key_is_rejected(client):
    resp = client.post("/api/translate", json={"text": "Hello", "useServerSide": False})
    assert resp.status_code == 400  # nosec B101
    assert resp.json()["detail"] == "User API key is required for client mode"  # nosec B101


def test_unsupported_provider_in_client_mode(client):
    resp = client.post(
        "/api/translate/stream",
        json={"text": "Hello", "provider": "claude", "useServerSide": False, "userConfig": {"apiKey": "k"}},
    )
    assert resp.status_code == 400  # nosec B101
    assert resp.json()["detail"] == "Unsupported AI provider: claude"  # nosec B101


def test_upstream_failure_maps_to_502(client, server_key, upstream):
    _route(upstream)
    upstream.queue(status=503, json_body={"error": {"message": "overloaded"}})
    resp = client.post("/api/translate", json={"text": "Hello"})
    assert resp.status_code == 502  # nosec B101
    assert resp.json()["detail"] == "OpenAI API error: 503 - overloaded"  # nosec B101


def test_stream_emits_sse_frames(client, server_key, upstream):
    _route(upstream)
    upstream.queue_sse([openai_delta("Bon"), openai_delta("jour")])
    resp = client.post("/api/translate/stream", json={"text": "Hello", "targetLanguage": "French"})
    assert resp.status_code == 200  # nosec B101
    assert resp.headers["content-type"].startswith("text/plain")  # nosec B101
    assert resp.headers["cache-control"] == "no-cache"  # nosec B101
    events = parse_frames([resp.content])
    contents = [e["choices"][0]["delta"].get("content") for e in events[:-1]]
    assert contents == ["Bon", "jour", None]  # nosec B101
    assert events[-2]["choices"][0]["finish_reason"] == "stop"  # nosec B101
    assert events[-1] == "[DONE]"  # nosec B101
    assert upstream.last_json["stream"] is True  # nosec B101


def test_stream_upstream_error_becomes_error_event(client, server_key, upstream):
    _route(upstream)
    upstream.queue(status=401, json_body={"error": {"message": "bad key"}})
    resp = client.post("/api/translate/stream", json={"text": "Hello"})
    assert resp.status_code == 200  # nosec B101
    assert parse_frames([resp.content]) == [  # nosec B101
        {"error": {"message": "OpenAI API error: 401 - bad key", "type": "stream_error"}}
    ]


def test_dev_server_settings_from_environment(monkeypatch):
    from translate_providers.service import dev_server

    monkeypatch.setenv("TRANSLATE_SERVICE_HOST", "0.0.0.0")  # nosec B104
    monkeypatch.setenv("TRANSLATE_SERVICE_PORT", "not-a-port")
    monkeypatch.setenv("TRANSLATE_SERVICE_RELOAD", "false")
    calls = []
    monkeypatch.setattr(dev_server.uvicorn, "run", lambda app_path, **kw: calls.append((app_path, kw)))
    dev_server.main()
    assert calls == [  # nosec B101
        ("translate_providers.service.app:app", {"host": "0.0.0.0", "port": 8092, "reload": False})  # nosec B104
    ]


def test_dev_server_reload_defaults_on(monkeypatch):
    from translate_providers.service.dev_server import server_settings

    monkeypatch.delenv("TRANSLATE_SERVICE_RELOAD", raising=False)
    monkeypatch.setenv("TRANSLATE_SERVICE_PORT", "9001")
    settings = server_settings()
    assert settings["reload"] is True  # nosec B101
    assert settings["port"] == 9001  # nosec B101
