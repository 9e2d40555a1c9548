"""Failure categories shared by adapters, the stream processor and log events.

The string values appear as ``error_code`` in structured logs, so they are
kept lowercase and stable.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Normalized failure category for a translation request."""

    # credentials and request shape
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    # throttling and availability
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    UNAVAILABLE = "unavailable"
    SERVER_ERROR = "server_error"
    # upstream answered with something unusable
    BAD_RESPONSE = "bad_response"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
