"""Public interface for the Dash0 API adapter."""

from __future__ import annotations

from .client import SYNTHETIC_CHECKS_PATH, Dash0SyntheticCheckFetcher
from .schema import ErrorDetail, ErrorResponse

__all__ = [
    "SYNTHETIC_CHECKS_PATH",
    "Dash0SyntheticCheckFetcher",
    "ErrorDetail",
    "ErrorResponse",
]
