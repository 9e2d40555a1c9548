"""
Configuration-time error types.

Both errors are raised synchronously by the adapter factory or adapter
constructors, before any network call is made, and are never retried.
"""
from __future__ import annotations


class ConfigValidationError(ValueError):
    """Provider configuration is missing a field or holds an out-of-range value."""


class UnsupportedProviderError(Exception):
    """The requested provider name is not one the factory knows how to build."""


__all__ = ["ConfigValidationError", "UnsupportedProviderError"]
