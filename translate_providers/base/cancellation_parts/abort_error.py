"""Cancellation error type.

Defines the public ``AbortError`` used to signal consumer-initiated
cancellation of a translation stream. Kept isolated to satisfy the
one-class-per-file layout of the parts packages.
"""

from __future__ import annotations


class AbortError(RuntimeError):
    """Raised when a stream is cancelled cooperatively.

    Distinguishes cancellation from upstream failures: the stream processor
    closes silently on ``AbortError`` and never emits an error event for it.
    """


__all__ = ["AbortError"]
