"""Downstream event builders (OpenAI ``chat.completion.chunk`` shape)."""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional

from ..models import TokenUsage

CHUNK_OBJECT = "chat.completion.chunk"
COMPLETION_OBJECT = "chat.completion"
STREAM_ERROR_TYPE = "stream_error"


def delta_event(content: str, model: str) -> Dict[str, Any]:
    return {
        "choices": [{"delta": {"content": content}, "index": 0, "finish_reason": None}],
        "model": model,
        "object": CHUNK_OBJECT,
    }


def terminal_event(model: str, usage: Optional[TokenUsage] = None) -> Dict[str, Any]:
    event: Dict[str, Any] = {
        "choices": [{"delta": {}, "index": 0, "finish_reason": "stop"}],
        "model": model,
        "object": CHUNK_OBJECT,
    }
    usage_dict = usage.to_dict() if usage is not None else {}
    if usage_dict:
        event["usage"] = usage_dict
    return event


def error_event(message: str) -> Dict[str, Any]:
    return {"error": {"message": message, "type": STREAM_ERROR_TYPE}}


def completion_payload(content: str, model: str, usage: Optional[TokenUsage] = None) -> Dict[str, Any]:
    """Non-streaming response body returned by ``/api/translate``."""
    payload: Dict[str, Any] = {
        "id": f"chatcmpl-{uuid.uuid4().hex[:24]}",
        "object": COMPLETION_OBJECT,
        "created": int(time.time()),
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    usage_dict = usage.to_dict() if usage is not None else {}
    if usage_dict:
        payload["usage"] = usage_dict
    return payload


__all__ = [
    "delta_event",
    "terminal_event",
    "error_event",
    "completion_payload",
    "CHUNK_OBJECT",
    "COMPLETION_OBJECT",
    "STREAM_ERROR_TYPE",
]
