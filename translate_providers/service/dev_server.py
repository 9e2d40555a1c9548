"""
Development server entry point for the translation service.

Purpose
-------
Run ``service.app:app`` under uvicorn for local work; installed as the
``translate-dev-server`` console script.

Environment
-----------
- ``TRANSLATE_SERVICE_HOST``: interface to bind (default ``127.0.0.1``).
- ``TRANSLATE_SERVICE_PORT``: port to bind (default 8092); unparsable values
  fall back to the default.
- ``TRANSLATE_SERVICE_RELOAD``: ``true``/``1``/``yes`` enables auto-reload,
  anything else disables it (enabled when unset).
"""

from __future__ import annotations

import os
from typing import Any, Dict

import uvicorn

from translate_providers.base.logging import get_logger, log_event
from translate_providers.config.defaults import TRANSLATE_SERVICE_DEFAULT_HOST, TRANSLATE_SERVICE_DEFAULT_PORT

APP_PATH = "translate_providers.service.app:app"

_logger = get_logger("translate_providers.service")


def _port_from(value: str | None) -> int:
    try:
        return int(value) if value else TRANSLATE_SERVICE_DEFAULT_PORT
    except ValueError:
        return TRANSLATE_SERVICE_DEFAULT_PORT


def server_settings() -> Dict[str, Any]:
    """Collect uvicorn keyword arguments from the environment."""
    reload_env = os.getenv("TRANSLATE_SERVICE_RELOAD")
    return {
        "host": os.getenv("TRANSLATE_SERVICE_HOST") or TRANSLATE_SERVICE_DEFAULT_HOST,
        "port": _port_from(os.getenv("TRANSLATE_SERVICE_PORT")),
        "reload": reload_env is None or reload_env.strip().lower() in {"true", "1", "yes"},
    }


def main() -> None:
    settings = server_settings()
    log_event(_logger, "service.dev_server.start", **settings)
    uvicorn.run(APP_PATH, **settings)


if __name__ == "__main__":
    main()
