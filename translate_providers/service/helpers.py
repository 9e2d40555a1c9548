"""Service helpers: request body to adapter + domain request.

Resolution order for credentials:

- ``useServerSide`` (default): the server's configured key for the provider
  (``OPENAI_API_KEY`` / ``GEMINI_API_KEY`` / ``GOOGLE_API_KEY`` or the config
  file). Without one the caller gets :class:`ServerNotConfiguredError`, which
  the routes turn into a 200 ``SERVER_NOT_CONFIGURED`` body.
- client mode: ``userConfig.apiKey`` is required; ``userConfig.baseURL``
  replaces the provider default when given.

Model, token budget, temperature and the Gemini surface flag from the body
override the merged configuration.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from fastapi.responses import JSONResponse

from ..base.dto import ProviderConfig, TranslateBodyDTO
from ..base.errors import ConfigValidationError
from ..base.factory import AdapterFactory
from ..base.models import TranslationRequest
from ..config import build_provider_config, has_server_credentials
from ..config.defaults import TRANSLATE_DEFAULT_PROVIDER

SERVER_NOT_CONFIGURED = "SERVER_NOT_CONFIGURED"


class ServerNotConfiguredError(Exception):
    """Server-side mode was requested but no server key is configured."""


def resolve_provider_config(body: TranslateBodyDTO) -> ProviderConfig:
    """Merge server configuration with the per-request body.

    Raises:
        ServerNotConfiguredError: server mode without a server key.
        ConfigValidationError: client mode without ``userConfig.apiKey`` or a
            malformed merged value.
    """
    provider = (body.provider or TRANSLATE_DEFAULT_PROVIDER).lower().strip()
    overrides: Dict[str, Any] = {
        "model": body.model,
        "max_tokens": body.max_tokens,
        "temperature": body.temperature,
        "use_openai_compatible": body.use_openai_compatible,
    }
    if body.use_server_side:
        if not has_server_credentials(provider):
            raise ServerNotConfiguredError(provider)
    else:
        user = body.user_config
        if user is None or not user.api_key:
            raise ConfigValidationError("User API key is required for client mode")
        overrides["api_key"] = user.api_key
        overrides["base_url"] = user.base_url
    return build_provider_config(provider, overrides)


def prepare_translation(body: TranslateBodyDTO) -> Tuple[Any, TranslationRequest]:
    """Return ``(adapter, request)`` for a validated body."""
    config = resolve_provider_config(body)
    adapter = AdapterFactory.create_adapter(config)
    return adapter, body.to_translation_request(model=config.model, max_tokens=config.max_tokens)


def server_not_configured_response() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "error": "Server configuration not available",
            "code": SERVER_NOT_CONFIGURED,
            "message": "The server has no default credentials configured; "
            "send your own key with useServerSide=false.",
        },
    )


__all__ = [
    "SERVER_NOT_CONFIGURED",
    "ServerNotConfiguredError",
    "resolve_provider_config",
    "prepare_translation",
    "server_not_configured_response",
]
