"""Pacing strategies for simulated streaming.

The simulator asks a :class:`ChunkPacing` for two decisions: how long to wait
between pieces and how many words go into the next word window. Production
code uses :class:`RandomPacing` (jittered, non-uniform cadence); tests inject
:class:`FixedPacing` for deterministic output.
"""
from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable

from ...config.defaults import SIMULATOR_DELAY_MAX_SECONDS, SIMULATOR_DELAY_MIN_SECONDS


@runtime_checkable
class ChunkPacing(Protocol):
    """Strategy deciding inter-piece delay and word-window size."""

    def delay(self) -> float:
        """Seconds to wait before emitting the next piece."""
        ...

    def window_size(self, min_words: int, max_words: int) -> int:
        """Number of words for the next window, within ``[min_words, max_words]``."""
        ...


class RandomPacing:
    """Uniform jitter in ``[delay_min, delay_max]`` and random window sizes."""

    def __init__(
        self,
        delay_min: float = SIMULATOR_DELAY_MIN_SECONDS,
        delay_max: float = SIMULATOR_DELAY_MAX_SECONDS,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        if delay_min < 0 or delay_max < delay_min:
            raise ValueError("delay range must satisfy 0 <= delay_min <= delay_max")
        self.delay_min = delay_min
        self.delay_max = delay_max
        self._rng = rng or random.Random()  # nosec B311 - cadence jitter, not security

    def delay(self) -> float:
        return self._rng.uniform(self.delay_min, self.delay_max)

    def window_size(self, min_words: int, max_words: int) -> int:
        return self._rng.randint(min_words, max_words)


class FixedPacing:
    """Deterministic pacing: constant delay and constant window size."""

    def __init__(self, delay: float = 0.0, window: Optional[int] = None) -> None:
        self._delay = delay
        self._window = window
        self.delays_requested = 0

    def delay(self) -> float:
        self.delays_requested += 1
        return self._delay

    def window_size(self, min_words: int, max_words: int) -> int:
        if self._window is None:
            return min_words
        return max(min_words, min(max_words, self._window))


__all__ = ["ChunkPacing", "RandomPacing", "FixedPacing"]
