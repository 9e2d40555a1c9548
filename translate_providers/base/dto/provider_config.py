"""Per-request provider configuration DTO.

Purpose
-------
``ProviderConfig`` is what a caller (the HTTP service, a CLI, a test) builds
for one translation request and hands to ``AdapterFactory.create_adapter``.
It is consumed once and discarded; the adapter keeps only the frozen
``AdapterConfig`` derived from it.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for alias handling and type coercion.

Validation split
----------------
Pydantic only coerces types here (``"4096"`` → ``4096``). The semantic rules
(non-empty key/URL/model, positive ``max_tokens``, temperature range) are
enforced by ``AdapterFactory.validate_provider_config`` so that callers get a
``ConfigValidationError`` with a precise message instead of a pydantic error.
Both camelCase (``apiKey``, ``baseURL``, ``maxTokens``,
``useOpenAICompatible``) and snake_case field names are accepted.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import AdapterConfig


class ProviderConfig(BaseModel):
    """AdapterConfig fields plus provider selection hints."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    provider: Optional[str] = None
    api_key: str = Field(default="", alias="apiKey")
    base_url: str = Field(default="", alias="baseURL")
    model: str = ""
    max_tokens: int = Field(default=0, alias="maxTokens")
    temperature: float = 0.0
    use_openai_compatible: Optional[bool] = Field(default=None, alias="useOpenAICompatible")

    def to_adapter_config(self) -> AdapterConfig:
        """Freeze the connection settings for an adapter."""
        return AdapterConfig(
            api_key=self.api_key,
            base_url=self.base_url.rstrip("/"),
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

    def __repr_args__(self):  # keep credentials out of logs
        for name, value in super().__repr_args__():
            yield name, ("***" if name == "api_key" and value else value)


__all__ = ["ProviderConfig"]
