"""
FastAPI application for the translation service.

Purpose
-------
Thin HTTP wiring over the adapter layer: request bodies are validated into
``TranslateBodyDTO``, turned into an adapter plus a ``TranslationRequest`` by
``service.helpers``, and handed to ``process_translation`` (JSON) or
``StreamProcessor`` (SSE, see ``service.translate_stream``).

Status mapping
--------------
- Invalid body, invalid configuration, unsupported provider → 400.
- Server mode without a configured key → 200 with
  ``{"error", "code": "SERVER_NOT_CONFIGURED", "message"}``.
- Upstream failures (``ProviderError``) → 502 with the upstream message.
"""

from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from translate_providers import __version__
from translate_providers.base.dto import TranslateBodyDTO
from translate_providers.base.errors import ConfigValidationError, ProviderError, UnsupportedProviderError
from translate_providers.base.logging import get_logger, log_event
from translate_providers.base.streaming import process_translation
from translate_providers.config.defaults import TRANSLATE_SERVICE_CORS_DEFAULT_ORIGINS

from .helpers import ServerNotConfiguredError, prepare_translation, server_not_configured_response

_logger = get_logger("translate_providers.service")

app = FastAPI(title="Translation Service", version=__version__)


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

cors_origins_env = os.getenv("TRANSLATE_SERVICE_CORS_ORIGINS", TRANSLATE_SERVICE_CORS_DEFAULT_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def validate_body(raw: Dict[str, Any]) -> TranslateBodyDTO:
    """Strictly validate a raw JSON body (400 on failure)."""
    try:
        return TranslateBodyDTO.model_validate(raw)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False)) from e


# ---------------------------------------------------------------------------
# Health and translation endpoints
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health() -> Dict[str, Any]:
    """Check the health status of the service."""
    return {"ok": True}


@app.post("/api/translate")
def post_translate(raw: Dict[str, Any] = Body(...)):
    """Translate ``text`` in one round trip.

    Returns an OpenAI-shaped ``chat.completion`` payload whose
    ``choices[0].message.content`` is the translation.
    """
    body = validate_body(raw)
    try:
        adapter, request = prepare_translation(body)
    except ServerNotConfiguredError:
        return server_not_configured_response()
    except (ConfigValidationError, UnsupportedProviderError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        return process_translation(adapter, request)
    except ProviderError as e:
        log_event(_logger, "service.upstream_error", provider=e.provider, code=e.code.value, error=e.message)
        raise HTTPException(status_code=502, detail=e.message) from e


def get_app() -> FastAPI:
    """Return the application with every route registered."""
    return app


# Registers /api/translate/stream on ``app``.
from . import translate_stream  # noqa: E402,F401
