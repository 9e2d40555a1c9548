"""Unified timeout configuration for upstream calls.

TimeoutConfig
    Normalized timeout values (seconds). ``stream_timeout_seconds`` is the
    idle read timeout while waiting for the next upstream bytes; it is also
    the policy for an upstream that streams partially and then stalls: the
    read times out, the adapter raises ``UpstreamHTTPError`` and the stream
    processor emits one error event, leaving already emitted content in place.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use only. Supported environment variables (all optional):
        TRANSLATE_TIMEOUT_CONNECT_SECONDS
        TRANSLATE_TIMEOUT_HTTP_SECONDS
        TRANSLATE_TIMEOUT_STREAM_SECONDS

``reset_timeout_config()`` drops the cache (tests, config reload).
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish the TCP/TLS connection.
        http_timeout_seconds: Read timeout for one-shot (non-streaming) calls.
        stream_timeout_seconds: Idle timeout between two upstream reads while
            streaming.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 60.0

    def as_httpx(self, *, streaming: bool) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` for a streaming or one-shot call."""
        read = self.stream_timeout_seconds if streaming else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return process-cached `TimeoutConfig` instance."""
    global _CACHED  # noqa: PLW0603 - documented module cache
    if _CACHED is not None:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(
            "TRANSLATE_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds
        ),
        http_timeout_seconds=_parse_env_float("TRANSLATE_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(
            "TRANSLATE_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds
        ),
    )
    return _CACHED


def reset_timeout_config() -> None:
    """Forget the cached configuration so the next call re-reads the environment."""
    global _CACHED  # noqa: PLW0603
    _CACHED = None


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "reset_timeout_config",
]
