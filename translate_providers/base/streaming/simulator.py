"""Chunk simulator: incremental output synthesized from one atomic text.

``intelligent_chunk`` decides the piece boundaries, ``simulate_stream`` emits
them as ``StreamChunk`` objects with a paced, cancellable delay in between.

Splitting rules, first match wins:

1. Texts shorter than 50 characters stay whole.
2. Two or more paragraphs (blank-line separated) are emitted per paragraph.
3. Texts over 200 characters with two or more sentences (``.``, ``!`` or
   ``?`` followed by whitespace) are emitted per sentence.
4. Otherwise word windows of 5 to 15 words, sized by the pacing strategy.

Separators are never dropped: the whitespace between two pieces stays at the
end of the earlier piece, so ``"".join(intelligent_chunk(text)) == text``.
"""
from __future__ import annotations

import re
import time
from typing import Iterator, List, Optional, Pattern

from ..cancellation import AbortError, CancellationToken
from ..models import StreamChunk, TokenUsage
from ...config.defaults import (
    SIMULATOR_MAX_WORDS,
    SIMULATOR_MIN_CHUNK_CHARS,
    SIMULATOR_MIN_WORDS,
    SIMULATOR_SENTENCE_MIN_CHARS,
)
from .pacing import ChunkPacing, RandomPacing

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n\s*")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_WORD = re.compile(r"\S+\s*")


def _split_keeping_separators(text: str, pattern: Pattern[str]) -> List[str]:
    """Split at ``pattern`` matches, attaching each match to the piece before it."""
    pieces: List[str] = []
    start = 0
    for match in pattern.finditer(text):
        if not text[start : match.start()].strip():
            continue
        pieces.append(text[start : match.end()])
        start = match.end()
    if start < len(text):
        pieces.append(text[start:])
    return pieces


def _word_windows(text: str, pacing: ChunkPacing, min_words: int, max_words: int) -> List[str]:
    words = _WORD.findall(text)
    leading = text[: len(text) - len(text.lstrip())]
    if not words:
        return [text]
    words[0] = leading + words[0]
    windows: List[str] = []
    i = 0
    while i < len(words):
        size = max(1, pacing.window_size(min_words, max_words))
        windows.append("".join(words[i : i + size]))
        i += size
    return windows


def intelligent_chunk(
    text: str,
    pacing: Optional[ChunkPacing] = None,
    *,
    min_words: int = SIMULATOR_MIN_WORDS,
    max_words: int = SIMULATOR_MAX_WORDS,
) -> List[str]:
    """Split ``text`` into display pieces whose concatenation is ``text``."""
    if len(text) < SIMULATOR_MIN_CHUNK_CHARS:
        return [text]
    paragraphs = _split_keeping_separators(text, _PARAGRAPH_BREAK)
    if len(paragraphs) >= 2:
        return paragraphs
    if len(text) > SIMULATOR_SENTENCE_MIN_CHARS:
        sentences = _split_keeping_separators(text, _SENTENCE_BREAK)
        if len(sentences) >= 2:
            return sentences
    return _word_windows(text, pacing or RandomPacing(), min_words, max_words)


def _pause(seconds: float, token: Optional[CancellationToken]) -> None:
    if token is None:
        time.sleep(seconds)
        return
    if token.wait(seconds):
        raise AbortError(token.reason or "operation cancelled")


def simulate_stream(
    text: str,
    *,
    pacing: Optional[ChunkPacing] = None,
    token: Optional[CancellationToken] = None,
    usage: Optional[TokenUsage] = None,
) -> Iterator[StreamChunk]:
    """Yield ``text`` as paced delta chunks followed by one terminal chunk.

    The terminal chunk carries ``usage`` when given, otherwise an estimate of
    ``total_tokens=len(text)``.

    Raises:
        AbortError: ``token`` was cancelled before or during a pause.
    """
    pacing = pacing or RandomPacing()
    pieces = [p for p in intelligent_chunk(text, pacing) if p]
    for index, piece in enumerate(pieces):
        if index:
            _pause(pacing.delay(), token)
        if token is not None:
            token.raise_if_cancelled()
        yield StreamChunk.delta(piece)
    yield StreamChunk.terminal(usage or TokenUsage(total_tokens=len(text)))


__all__ = ["intelligent_chunk", "simulate_stream"]
