"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by adapters, the chunk simulator
and the stream processor. Besides cooperative polling it supports:

- ``wait(seconds)``: an interruptible sleep used for simulator pacing, which
  returns early as soon as the token is cancelled.
- ``register(callback)``: cancel-time callbacks used to close an in-flight
  upstream response so a blocked read returns promptly.
"""

from __future__ import annotations

import logging
from threading import Event, Lock
from typing import Callable, List

from .abort_error import AbortError

_logger = logging.getLogger("translate_providers.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe: ``cancel`` may be called from a different thread than the one
    iterating the stream (e.g. a disconnect watcher in the HTTP service).
    Child tokens inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._lock = Lock()
        self._event = Event()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callable[[], None]] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        self._event.set()
        for callback in callbacks:
            self._run_callback(callback)
        for child in children:
            child.cancel(reason)

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` once on cancellation; returns an unregister function.

        If the token is already cancelled the callback runs immediately.
        """
        with self._lock:
            already = self._cancelled
            if not already:
                self._callbacks.append(callback)
        if already:
            self._run_callback(callback)

        def _unregister() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return _unregister

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._cancelled
            reason = self._reason
        if should_cancel:
            token.cancel(reason)
        return token

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if cancelled meanwhile."""
        if seconds <= 0:
            return self._cancelled
        return self._event.wait(seconds)

    def raise_if_cancelled(self) -> None:
        """Raise ``AbortError`` if token is cancelled."""
        if self._cancelled:
            raise AbortError(self._reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    @staticmethod
    def _run_callback(callback: Callable[[], None]) -> None:
        # A failing close must not prevent the remaining callbacks from running.
        try:
            callback()
        except Exception as exc:  # noqa: BLE001
            _logger.debug("cancellation callback failed: %s", exc)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._cancelled}, "
            f"reason={self._reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
