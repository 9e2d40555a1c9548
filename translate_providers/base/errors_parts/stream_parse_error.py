"""
Fragment decode error used inside the streaming parsers.

``StreamParseError`` never escapes a stream: the incremental JSON parser and
the SSE reader catch it, log the discarded fragment, and keep going.
"""
from __future__ import annotations

import json
from typing import Any, Dict


class StreamParseError(ValueError):
    """A streamed fragment could not be decoded as a JSON object.

    Attributes:
        fragment: The offending text, truncated for logging.
    """

    def __init__(self, message: str, fragment: str = "") -> None:
        super().__init__(message)
        self.fragment = fragment[:200]


def decode_json_fragment(text: str) -> Dict[str, Any]:
    """Decode ``text`` as a JSON object or raise :class:`StreamParseError`."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StreamParseError(f"invalid JSON fragment: {exc.msg}", text) from exc
    if not isinstance(value, dict):
        raise StreamParseError("fragment is not a JSON object", text)
    return value


__all__ = ["StreamParseError", "decode_json_fragment"]
