from __future__ import annotations

import pytest

from translate_providers import AdapterFactory, create_adapter
from translate_providers.base.dto import ProviderConfig
from translate_providers.base.errors import ConfigValidationError, UnsupportedProviderError
from translate_providers.gemini import GeminiOpenAICompatibleAdapter, NativeGeminiAdapter
from translate_providers.openai import OpenAICompatibleAdapter


def _config(**overrides) -> ProviderConfig:
    values = dict(
        provider="openai",
        api_key="sk-test",
        base_url="https://api.openai.test/v1/",
        model="gpt-test",
        max_tokens=100,
        temperature=0.5,
    )
    values.update(overrides)
    return ProviderConfig(**values)


def test_supported_providers():
    assert AdapterFactory.supported_providers() == ("openai", "gemini")  # nosec B101


def test_openai_adapter_gets_frozen_config():
    adapter = create_adapter(_config())
    assert isinstance(adapter, OpenAICompatibleAdapter)  # nosec B101
    assert adapter.config.base_url == "https://api.openai.test/v1"  # nosec B101
    assert adapter.config.max_tokens == 100  # nosec B101


@pytest.mark.parametrize(
    "flag,expected",
    [(None, GeminiOpenAICompatibleAdapter), (True, GeminiOpenAICompatibleAdapter), (False, NativeGeminiAdapter)],
)
def test_gemini_variant_selection(flag, expected):
    adapter = create_adapter(_config(provider="gemini", use_openai_compatible=flag))
    assert type(adapter) is expected  # nosec B101


def test_provider_name_is_case_insensitive():
    assert isinstance(create_adapter(_config(provider=" Gemini ")), GeminiOpenAICompatibleAdapter)  # nosec B101


def test_unknown_provider_is_unsupported():
    with pytest.raises(UnsupportedProviderError, match="Unsupported AI provider: claude"):
        create_adapter(_config(provider="claude"))


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"provider": ""}, "Provider is required"),
        ({"api_key": ""}, "API key is required"),
        ({"base_url": ""}, "Base URL is required"),
        ({"model": ""}, "Model is required"),
        ({"max_tokens": 0}, "Max tokens must be a positive number"),
        ({"max_tokens": -5}, "Max tokens must be a positive number"),
        ({"temperature": -0.1}, "Temperature must be between 0 and 2"),
        ({"temperature": 2.5}, "Temperature must be between 0 and 2"),
        ({"temperature": float("nan")}, "Temperature must be between 0 and 2"),
    ],
)
def test_validation_messages(overrides, message):
    with pytest.raises(ConfigValidationError) as info:
        create_adapter(_config(**overrides))
    assert str(info.value) == message  # nosec B101


def test_validate_rejects_unknown_provider_directly():
    with pytest.raises(ConfigValidationError, match="Unsupported provider: claude"):
        AdapterFactory.validate_provider_config(_config(provider="claude"))


def test_temperature_bounds_are_inclusive():
    AdapterFactory.validate_provider_config(_config(temperature=0))
    AdapterFactory.validate_provider_config(_config(temperature=2))


def test_camel_case_aliases_are_accepted():
    config = ProviderConfig.model_validate(
        {
            "provider": "gemini",
            "apiKey": "g-test",
            "baseURL": "https://g.test/v1beta",
            "model": "gemini-test",
            "maxTokens": "256",
            "temperature": 0.1,
            "useOpenAICompatible": False,
        }
    )
    assert isinstance(create_adapter(config), NativeGeminiAdapter)  # nosec B101
    assert "g-test" not in repr(config)  # nosec B101


def test_should_use_openai_compatible_always_true():
    assert AdapterFactory.should_use_openai_compatible("https://g.test/v1beta/openai")  # nosec B101
    assert AdapterFactory.should_use_openai_compatible("https://generativelanguage.googleapis.com/v1beta")  # nosec B101
    assert AdapterFactory.should_use_openai_compatible("https://proxy.example")  # nosec B101


def test_adapter_kwargs_are_forwarded(upstream, pacing):
    adapter = create_adapter(_config(), client=upstream.client(), pacing=pacing)
    assert adapter.pacing is pacing  # nosec B101
