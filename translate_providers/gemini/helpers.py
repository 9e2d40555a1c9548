"""Gemini helpers module.

Purpose:
- URL resolution for the native ``generateContent`` endpoints and the
  OpenAI-compatible surface.
- Payload construction (``contents`` + ``generationConfig``).
- Extraction of text, finish reason and usage from native response objects.

All functions are pure; HTTP lives in the adapters.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from ..config.defaults import GEMINI_NATIVE_TOP_K, GEMINI_NATIVE_TOP_P
from ..base.models import TokenUsage

_NATIVE_VERSION_SUFFIX = re.compile(r"/v1(beta)?$")


def native_url(base_url: str, model: str, *, stream: bool) -> str:
    """Return the native ``:streamGenerateContent`` / ``:generateContent`` URL.

    The ``/v1beta`` segment is only added when the base URL does not already
    end in a version segment.
    """
    base = base_url.rstrip("/")
    if not _NATIVE_VERSION_SUFFIX.search(base):
        base = f"{base}/v1beta"
    method = "streamGenerateContent" if stream else "generateContent"
    return f"{base}/models/{model}:{method}"


def openai_compatible_base(base_url: str) -> str:
    """Append ``/openai`` unless the base URL already targets the compat surface."""
    base = base_url.rstrip("/")
    if "/openai" in base:
        return base
    return f"{base}/openai"


def native_headers(api_key: str) -> Dict[str, str]:
    return {"x-goog-api-key": api_key, "Content-Type": "application/json"}


def build_native_payload(*, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
    """Construct the ``generateContent`` request body for one user turn."""
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
            "candidateCount": 1,
            "topK": GEMINI_NATIVE_TOP_K,
            "topP": GEMINI_NATIVE_TOP_P,
        },
    }


def _first_candidate(obj: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    candidates = obj.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], Mapping):
        return candidates[0]
    return None


def extract_text(obj: Mapping[str, Any]) -> str:
    """``candidates[0].content.parts[0].text``; empty string when absent."""
    candidate = _first_candidate(obj)
    if candidate is None:
        return ""
    content = candidate.get("content")
    if not isinstance(content, Mapping):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], Mapping):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def extract_finish_reason(obj: Mapping[str, Any]) -> Optional[str]:
    candidate = _first_candidate(obj)
    if candidate is None:
        return None
    reason = candidate.get("finishReason")
    return str(reason) if reason else None


def extract_usage(obj: Mapping[str, Any]) -> Optional[TokenUsage]:
    return TokenUsage.from_gemini(obj.get("usageMetadata"))


__all__ = [
    "native_url",
    "openai_compatible_base",
    "native_headers",
    "build_native_payload",
    "extract_text",
    "extract_finish_reason",
    "extract_usage",
]
