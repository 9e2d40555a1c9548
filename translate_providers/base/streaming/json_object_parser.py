"""Incremental parser for undelimited concatenated JSON objects.

Some upstreams (the native Gemini ``streamGenerateContent`` endpoint) return a
body made of whole JSON objects written back to back, optionally wrapped in
array framing (``[``, ``,``, ``]``, newlines). A single network read may hold
zero, one or several objects, or end in the middle of one.

The parser is a finite-state machine over three named states plus a brace
depth counter:

``OUTSIDE``
    Not inside a string literal. ``{`` and ``}`` change the depth; when the
    depth returns to zero the text since the opening brace is a candidate.
``IN_STRING``
    Inside a string literal; braces are plain characters.
``ESCAPED``
    The previous character was a backslash inside a string; the current
    character is taken literally and the machine returns to ``IN_STRING``.

State is carried between :meth:`feed` calls so each call scans only the newly
appended characters, and the emitted objects are identical for any partition
of the same input into reads. Text outside top-level objects is ignored.
Candidates that fail to decode are logged and dropped without aborting the
stream.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from ..errors import StreamParseError, decode_json_fragment
from ..logging import LogContext, get_logger, normalized_log_event


class ScanState(str, Enum):
    """Lexical state of the scanner."""

    OUTSIDE = "outside"
    IN_STRING = "in_string"
    ESCAPED = "escaped"


class JsonObjectStreamParser:
    """Extract complete top-level JSON objects from a growing text buffer."""

    def __init__(self, *, ctx: Optional[LogContext] = None, logger=None) -> None:
        self._buffer = ""
        self._scan_pos = 0
        self._object_start: Optional[int] = None
        self._depth = 0
        self._state = ScanState.OUTSIDE
        self._ctx = ctx
        self._logger = logger or get_logger("translate_providers.streaming.parser")
        self.discarded = 0

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def depth(self) -> int:
        return self._depth

    def feed(self, text: str) -> List[Dict[str, Any]]:
        """Append ``text`` and return every object completed by it, in order."""
        if not text:
            return []
        self._buffer += text
        out: List[Dict[str, Any]] = []
        buf = self._buffer
        i = self._scan_pos
        n = len(buf)
        while i < n:
            ch = buf[i]
            if self._state is ScanState.ESCAPED:
                self._state = ScanState.IN_STRING
            elif self._state is ScanState.IN_STRING:
                if ch == "\\":
                    self._state = ScanState.ESCAPED
                elif ch == '"':
                    self._state = ScanState.OUTSIDE
            elif ch == '"':
                # strings only matter inside an object; a stray quote in the
                # framing between objects would otherwise swallow the next one
                if self._depth > 0:
                    self._state = ScanState.IN_STRING
            elif ch == "{":
                if self._depth == 0:
                    self._object_start = i
                self._depth += 1
            elif ch == "}" and self._depth > 0:
                self._depth -= 1
                if self._depth == 0 and self._object_start is not None:
                    self._emit(buf[self._object_start : i + 1], out)
                    self._object_start = None
            i += 1
        self._compact(i)
        return out

    def close(self) -> str:
        """Finish the stream and return any incomplete trailing text.

        A non-empty return value means the upstream ended inside an object;
        that content is dropped (soft failure) and the caller should log it.
        """
        tail = self._buffer[self._object_start :] if self._object_start is not None else ""
        self._buffer = ""
        self._scan_pos = 0
        self._object_start = None
        self._depth = 0
        self._state = ScanState.OUTSIDE
        return tail

    def _emit(self, candidate: str, out: List[Dict[str, Any]]) -> None:
        try:
            out.append(decode_json_fragment(candidate))
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

    def _compact(self, scanned_to: int) -> None:
        # Keep only the open object (if any); everything before it is consumed.
        if self._object_start is None:
            self._buffer = ""
            self._scan_pos = 0
            return
        self._buffer = self._buffer[self._object_start :]
        self._scan_pos = scanned_to - self._object_start
        self._object_start = 0


__all__ = ["JsonObjectStreamParser", "ScanState"]
