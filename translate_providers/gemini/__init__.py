"""
Gemini provider package.

Exports:
- NativeGeminiAdapter: native ``streamGenerateContent`` adapter
- GeminiOpenAICompatibleAdapter: OpenAI-compatible surface with reality detection
"""

from .client import NativeGeminiAdapter
from .openai_compat import GeminiOpenAICompatibleAdapter

__all__ = ["NativeGeminiAdapter", "GeminiOpenAICompatibleAdapter"]
