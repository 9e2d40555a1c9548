"""Unified configuration layer for translation providers.

Goals
-----
* Centralize defaults (models, base URLs, token budget, temperature).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``TRANSLATE_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENAI_MODEL``, ``GEMINI_API_KEY``)
    4. In-code overrides passed to the helper
* Provide single call sites: ``get_provider_config`` returns the merged
  mapping, ``build_provider_config`` returns a ``ProviderConfig`` ready for
  the adapter factory.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL,
<PROVIDER>_MAX_TOKENS, <PROVIDER>_TEMPERATURE, <PROVIDER>_USE_OPENAI_COMPATIBLE.
Gemini keys are also read from ``GOOGLE_API_KEY``.

External Config File
--------------------
``.yaml``/``.yml`` files are read with PyYAML, anything else as JSON::

    openai:
      model: gpt-4o-mini
      base_url: https://api.openai.com/v1
    gemini:
      use_openai_compatible: false
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..base.dto import ProviderConfig
from ..base.errors import ConfigValidationError
from .defaults import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

_logger = logging.getLogger("translate_providers.config")


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "model": OPENAI_DEFAULT_MODEL,
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "max_tokens": DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
    },
    "gemini": {
        "model": GEMINI_DEFAULT_MODEL,
        "base_url": GEMINI_DEFAULT_BASE_URL,
        "max_tokens": DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
    },
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "max_tokens": "MAX_TOKENS",
    "temperature": "TEMPERATURE",
    "use_openai_compatible": "USE_OPENAI_COMPATIBLE",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``TRANSLATE_CONFIG_FILE``.

    A missing or unreadable file yields ``{}`` and a warning; configuration
    problems surface later as ``ConfigValidationError`` from the factory.
    """
    global _FILE_CACHE  # noqa: PLW0603 - documented module cache
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("TRANSLATE_CONFIG_FILE")
    data: Any = {}
    if path:
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
            if p.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(text) or {}
            else:
                data = json.loads(text)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            _logger.warning("ignoring unreadable config file %s: %s", path, exc)
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Drop the cached external file so the next lookup re-reads it."""
    global _FILE_CACHE  # noqa: PLW0603
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val != "":
            out[field] = val
    if not out.get("api_key") or is_placeholder(out.get("api_key")):
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
        else:
            out.pop("api_key", None)
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` override values are ignored so callers can pass optional fields
    straight through.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {"provider": name}
    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def build_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> ProviderConfig:
    """Return a ``ProviderConfig`` for ``provider`` from the merged sources.

    Raises:
        ConfigValidationError: a merged value has the wrong type (e.g. a
            non-numeric ``OPENAI_MAX_TOKENS``).
    """
    merged = get_provider_config(provider, overrides)
    try:
        return ProviderConfig.model_validate(merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        raise ConfigValidationError(f"Invalid configuration value for {field}: {first.get('msg')}") from exc


def has_server_credentials(provider: str) -> bool:
    """Whether a usable (non-placeholder) API key is configured server-side."""
    key = get_provider_config(provider).get("api_key")
    return bool(key) and not is_placeholder(key)


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "build_provider_config",
    "has_server_credentials",
    "reset_config_cache",
]
