"""Unified translation error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``translate_providers.base.errors_parts`` to keep a stable import path.

Taxonomy
--------
- ``ConfigValidationError`` / ``UnsupportedProviderError``: raised before any
  network call; fatal for the request.
- ``ProviderError`` and its subclasses ``UpstreamHTTPError`` and
  ``UpstreamFormatError``: upstream failures, surfaced downstream as a single
  ``stream_error`` event once streaming has begun.
- ``StreamParseError``: malformed fragment, recovered locally by the parsers.
- ``AbortError`` lives in :mod:`translate_providers.base.cancellation`.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.upstream_http_error import UpstreamHTTPError
from .errors_parts.upstream_format_error import UpstreamFormatError, UnknownUpstreamFormatError
from .errors_parts.config_errors import ConfigValidationError, UnsupportedProviderError
from .errors_parts.stream_parse_error import StreamParseError, decode_json_fragment
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "UpstreamHTTPError",
    "UpstreamFormatError",
    "UnknownUpstreamFormatError",
    "ConfigValidationError",
    "UnsupportedProviderError",
    "StreamParseError",
    "decode_json_fragment",
    "classify_exception",
    "code_for_status",
]
