"""
Pydantic DTOs for inbound translation requests at the HTTP boundary.

Purpose
-------
Validate the JSON body of ``/api/translate`` and ``/api/translate/stream``
before anything reaches the adapter layer. The body mirrors what browser
clients send: camelCase keys, optional per-user credentials, and an opt-in
for the server-side configured key.

External dependencies: Pydantic only (no network calls). Validation either
succeeds or raises ``pydantic.ValidationError``, which FastAPI turns into a
4xx response.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import TranslationRequest


class UserConfigDTO(BaseModel):
    """Credentials supplied by the client when not using the server-side key."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_key: Optional[str] = Field(default=None, alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseURL")


class TranslateBodyDTO(BaseModel):
    """Inbound translation body.

    Rules:
        - ``text`` must be a non-empty string.
        - ``maxTokens`` (when given) must be positive and ``temperature``
          within ``[0, 2]``.
        - ``useServerSide`` (default ``True``) selects the server-configured
          credentials; otherwise ``userConfig`` must carry them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: str = Field(min_length=1)
    provider: Optional[str] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    system_message: Optional[str] = Field(default=None, alias="systemMessage")
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")
    use_openai_compatible: Optional[bool] = Field(default=None, alias="useOpenAICompatible")
    use_server_side: bool = Field(default=True, alias="useServerSide")
    user_config: Optional[UserConfigDTO] = Field(default=None, alias="userConfig")

    def to_translation_request(self, *, model: str, max_tokens: int) -> TranslationRequest:
        """Build the domain request once the effective model/budget are known."""
        return TranslationRequest(
            text=self.text,
            model=model,
            max_tokens=max_tokens,
            system_message=self.system_message,
            target_language=self.target_language,
            temperature=self.temperature,
        )


__all__ = ["UserConfigDTO", "TranslateBodyDTO"]
