"""Shared fixtures for adapter, streaming and service tests.

Provides a scripted upstream served through ``httpx.MockTransport`` (bodies
delivered as explicit byte chunks so each chunk is one network read), a
deterministic clock, deterministic pacing, and log capture for the
non-propagating ``translate_providers`` logger.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import pytest

from translate_providers.base.http import close_all_clients
from translate_providers.base.logging import BASE_LOGGER_NAME, get_logger
from translate_providers.base.streaming.pacing import FixedPacing
from translate_providers.base.timeouts import reset_timeout_config
from translate_providers.config import reset_config_cache
from translate_providers.tests.helpers import FakeUpstream


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for r in self.records:
            try:
                out.append(json.loads(r.getMessage()))
            except ValueError:
                continue
        return out


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def pacing() -> FixedPacing:
    return FixedPacing(delay=0.0)


@pytest.fixture()
def fake_clock():
    """Manually advanced monotonic clock (seconds)."""
    state = {"t": 100.0}

    class Clock:
        def __call__(self) -> float:
            return state["t"]

        @staticmethod
        def advance(ms: float) -> None:
            state["t"] += ms / 1000.0

    return Clock()


@pytest.fixture()
def log_capture(monkeypatch):
    """Attach a handler to the package base logger (it does not propagate)."""
    monkeypatch.setenv("TRANSLATE_LOG_LEVEL", "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Start each test from defaults: no provider keys, no config file."""
    for name in (
        "OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "OPENAI_MODEL",
        "OPENAI_BASE_URL",
        "GEMINI_MODEL",
        "GEMINI_BASE_URL",
        "TRANSLATE_CONFIG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    reset_timeout_config()
    yield
    reset_config_cache()
    reset_timeout_config()
    close_all_clients()
