"""Adapter factory.

Purpose
-------
Select and construct the translation adapter for a ``ProviderConfig``.
Adapters are imported lazily using ``importlib`` so importing the factory
does not import every provider package.

Selection
---------
- ``openai`` → ``OpenAICompatibleAdapter``.
- ``gemini`` → ``GeminiOpenAICompatibleAdapter`` unless
  ``use_openai_compatible`` is explicitly ``False``, in which case
  ``NativeGeminiAdapter``.

Validation
----------
``validate_provider_config`` runs before any adapter is constructed (and so
before any network call) and raises ``ConfigValidationError`` with a precise
message. An unknown provider passed to ``create_adapter`` raises
``UnsupportedProviderError`` instead.

The factory performs no retries or fallbacks; it either returns an instance
or raises.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .dto.provider_config import ProviderConfig
from .errors import ConfigValidationError, UnsupportedProviderError


class AdapterFactory:
    """Create translation adapters from a canonical provider name."""

    # Map (provider, variant) to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, Dict[str, str]]] = {
        "openai": {
            "default": {"module": "translate_providers.openai.client", "class": "OpenAICompatibleAdapter"},
        },
        "gemini": {
            "default": {
                "module": "translate_providers.gemini.openai_compat",
                "class": "GeminiOpenAICompatibleAdapter",
            },
            "native": {"module": "translate_providers.gemini.client", "class": "NativeGeminiAdapter"},
        },
    }

    @classmethod
    def supported_providers(cls) -> Tuple[str, ...]:
        """Canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def create_adapter(cls, config: ProviderConfig, **kwargs: Any):
        """Validate ``config`` and return a ready adapter.

        Parameters
        ----------
        config:
            Provider selection plus connection settings.
        **kwargs:
            Forwarded to the adapter constructor (``client``, ``pacing``,
            ``logger``; the Gemini compat adapter also takes ``clock`` and
            ``threshold_ms``).

        Raises
        ------
        UnsupportedProviderError
            ``config.provider`` is not one of :meth:`supported_providers`.
        ConfigValidationError
            Any other configuration rule fails.
        """
        name = (config.provider or "").lower().strip()
        if name and name not in cls._PROVIDERS:
            raise UnsupportedProviderError(f"Unsupported AI provider: {config.provider}")
        cls.validate_provider_config(config)

        variant = "native" if name == "gemini" and config.use_openai_compatible is False else "default"
        entry = cls._PROVIDERS[name][variant]
        klass: Type = getattr(import_module(entry["module"]), entry["class"])
        return klass(config.to_adapter_config(), **kwargs)

    @classmethod
    def validate_provider_config(cls, config: ProviderConfig) -> None:
        """Raise ``ConfigValidationError`` for the first rule ``config`` breaks."""
        if not config.provider:
            raise ConfigValidationError("Provider is required")
        if config.provider.lower().strip() not in cls._PROVIDERS:
            raise ConfigValidationError(f"Unsupported provider: {config.provider}")
        if not config.api_key:
            raise ConfigValidationError("API key is required")
        if not config.base_url:
            raise ConfigValidationError("Base URL is required")
        if not config.model:
            raise ConfigValidationError("Model is required")
        if not config.max_tokens or config.max_tokens <= 0:
            raise ConfigValidationError("Max tokens must be a positive number")
        if not 0 <= config.temperature <= 2:
            raise ConfigValidationError("Temperature must be between 0 and 2")

    @staticmethod
    def should_use_openai_compatible(base_url: str) -> bool:
        """Whether a Gemini base URL should go through the compat surface.

        Explicit ``/openai`` paths and the Google host always do; every other
        URL currently does as well, so only ``use_openai_compatible=False``
        selects the native adapter.
        """
        if "/openai" in base_url:
            return True
        if "generativelanguage.googleapis.com" in base_url:
            return True
        return True


def create_adapter(config: ProviderConfig, **kwargs: Any):
    """Module-level shortcut for :meth:`AdapterFactory.create_adapter`."""
    return AdapterFactory.create_adapter(config, **kwargs)


__all__ = ["AdapterFactory", "create_adapter"]
