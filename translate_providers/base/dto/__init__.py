"""Pydantic DTOs used at the configuration and HTTP boundaries."""

from .provider_config import ProviderConfig
from .translate import TranslateBodyDTO, UserConfigDTO

__all__ = ["ProviderConfig", "TranslateBodyDTO", "UserConfigDTO"]
