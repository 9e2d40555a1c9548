"""Stream reality detection.

Some upstreams answer a ``stream: true`` request with the whole translation
in one SSE line (or one burst of lines). Emitting that burst as-is would look
like a frozen UI followed by a wall of text, so the detector holds deltas
until the upstream proves it is really streaming:

- The first delta is held.
- A later delta arriving more than ``threshold_ms`` after the previous one
  marks the stream real; everything held is released together with that
  delta, in order, and from then on deltas pass straight through.
- Deltas arriving faster than the threshold keep being held.

Whatever is still held when the upstream completes was delivered atomically;
the adapter takes it from :meth:`drain` and hands it to the simulator.
"""
from __future__ import annotations

import time
from typing import Callable, List, Optional

from ...config.defaults import REAL_STREAM_THRESHOLD_MS


class StreamRealityDetector:
    """Per-stream detector; not shared across requests."""

    def __init__(
        self,
        threshold_ms: float = REAL_STREAM_THRESHOLD_MS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.threshold_ms = threshold_ms
        self.is_real_stream = False
        self.deltas_seen = 0
        self._clock = clock
        self._last_at: Optional[float] = None
        self._pending: List[str] = []

    def observe(self, delta: str) -> List[str]:
        """Record ``delta`` and return the pieces that may be emitted now."""
        now = self._clock()
        self.deltas_seen += 1
        previous, self._last_at = self._last_at, now
        if self.is_real_stream:
            return [delta]
        if previous is not None and (now - previous) * 1000.0 > self.threshold_ms:
            self.is_real_stream = True
            released, self._pending = self._pending + [delta], []
            return released
        self._pending.append(delta)
        return []

    @property
    def pending_text(self) -> str:
        return "".join(self._pending)

    def drain(self) -> str:
        """Return and clear the text still held back."""
        text = self.pending_text
        self._pending = []
        return text


__all__ = ["StreamRealityDetector"]
