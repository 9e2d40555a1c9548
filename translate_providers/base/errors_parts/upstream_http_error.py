"""
Non-2xx upstream response error.

Raised by adapters when a provider endpoint answers with an error status, or
when the transport fails before a status is available. The stream processor
converts it into exactly one downstream error event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .provider_error import ProviderError


@dataclass
class UpstreamHTTPError(ProviderError):
    """Provider error carrying the upstream HTTP status code.

    Attributes:
        status_code: HTTP status returned by the upstream, or ``None`` for
            transport-level failures (connection reset, read timeout).
    """

    status_code: Optional[int] = None


__all__ = ["UpstreamHTTPError"]
