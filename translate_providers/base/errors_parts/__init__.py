"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `translate_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .upstream_http_error import UpstreamHTTPError
from .upstream_format_error import UpstreamFormatError, UnknownUpstreamFormatError
from .config_errors import ConfigValidationError, UnsupportedProviderError
from .stream_parse_error import StreamParseError, decode_json_fragment
from .classification import classify_exception, code_for_status

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
