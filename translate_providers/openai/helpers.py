"""OpenAI chat-completions helpers.

Purpose:
- Keep URL resolution, payload construction and response/delta extraction
  side-effect free so both the OpenAI adapter and the Gemini
  OpenAI-compatible adapter share one implementation.

External dependencies:
- None beyond the package models; HTTP lives in the adapters.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from ..base.models import TokenUsage

_VERSION_SUFFIX = re.compile(r"/v\d+$")


def chat_completions_url(base_url: str) -> str:
    """Return the chat-completions endpoint for ``base_url``.

    ``https://api.openai.com/v1`` -> ``https://api.openai.com/v1/chat/completions``
    ``https://proxy.example`` -> ``https://proxy.example/v1/chat/completions``
    """
    base = base_url.rstrip("/")
    if _VERSION_SUFFIX.search(base):
        return f"{base}/chat/completions"
    return f"{base}/v1/chat/completions"


def build_chat_payload(
    *,
    model: str,
    system_message: str,
    text: str,
    max_tokens: int,
    temperature: float,
    stream: bool,
) -> Dict[str, Any]:
    """Construct the chat-completions request body (system + user message)."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": system_message},
            {"role": "user", "content": text},
        ],
        "max_tokens": max_tokens,
        "temperature": temperature,
        "stream": stream,
    }


def auth_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}


def _first_choice(obj: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    choices = obj.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return None


def extract_message_content(body: Mapping[str, Any]) -> Optional[str]:
    """``choices[0].message.content`` of a non-streaming response, if present."""
    choice = _first_choice(body)
    if choice is None:
        return None
    message = choice.get("message")
    if not isinstance(message, Mapping):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def extract_delta_content(event: Mapping[str, Any]) -> str:
    """``choices[0].delta.content`` of a stream event; empty string when absent."""
    choice = _first_choice(event)
    if choice is None:
        return ""
    delta = choice.get("delta")
    if not isinstance(delta, Mapping):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


def extract_stream_error(event: Mapping[str, Any]) -> Optional[str]:
    """Return the error message carried by an in-band SSE error event."""
    err = event.get("error")
    if err is None:
        return None
    if isinstance(err, Mapping):
        return str(err.get("message") or "Unknown error")
    return str(err)


def extract_usage(event: Mapping[str, Any]) -> Optional[TokenUsage]:
    return TokenUsage.from_openai(event.get("usage"))


__all__ = [
    "chat_completions_url",
    "build_chat_payload",
    "auth_headers",
    "extract_message_content",
    "extract_delta_content",
    "extract_stream_error",
    "extract_usage",
]
