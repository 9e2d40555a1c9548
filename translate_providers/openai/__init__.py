"""
OpenAI provider package.

Exports:
- OpenAICompatibleAdapter: chat-completions adapter (OpenAI and compatible proxies)
"""

from .client import OpenAICompatibleAdapter

__all__ = ["OpenAICompatibleAdapter"]
