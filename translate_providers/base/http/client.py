"""Shared HTTP client pool for translation adapters.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so concurrent translation requests share connections instead
    of paying a handshake per call. Timeouts derive from
    :func:`get_timeout_config`; call sites pass a per-request
    ``httpx.Timeout`` (streaming vs one-shot) from the same config.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by ``purpose`` (e.g. ``"openai.stream"``). Adapters
      always send absolute URLs, so one client serves every base URL.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      install a client backed by ``httpx.MockTransport`` with
      :func:`set_httpx_client` and call :func:`close_all_clients` afterwards.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Dict

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()
_logger = logging.getLogger("translate_providers.http")


def get_httpx_client(purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose.

    Parameters:
        purpose: A short string discriminating separate pools. Keep stable
            to maximize reuse.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a lock.
    """
    client = _CLIENTS.get(purpose)
    if client is not None:
        return client
    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None:
            return client
        client = httpx.Client(timeout=get_timeout_config().as_httpx(streaming=False))
        _CLIENTS[purpose] = client
        return client


def set_httpx_client(purpose: str, client: httpx.Client) -> None:
    """Install ``client`` for ``purpose``, closing any client it replaces."""
    with _LOCK:
        previous = _CLIENTS.get(purpose)
        _CLIENTS[purpose] = client
    if previous is not None and previous is not client:
        previous.close()


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        try:
            c.close()
        except (httpx.HTTPError, RuntimeError) as exc:  # nosec B110 - shutdown path
            _logger.debug("error closing pooled client: %s", exc)


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "set_httpx_client", "close_all_clients"]
