"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``translate_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is checked at every chunk boundary by the stream
  processor and by each adapter.
- ``AbortError`` is raised by operations that observe a cancellation request;
  it is never rendered as a downstream error event.
"""

from .cancellation_parts.abort_error import AbortError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "AbortError"]
