"""Cancellation parts package: the token and its abort error."""

from .abort_error import AbortError
from .cancellation_token import CancellationToken

__all__ = ["AbortError", "CancellationToken"]
