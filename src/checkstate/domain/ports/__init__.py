"""Domain port definitions for adapters."""

from __future__ import annotations

from .diagnostics import DiagnosticsReporter
from .fetching import RemoteDocumentFetcher
from .persistence import StateRepository

__all__ = [
    "DiagnosticsReporter",
    "RemoteDocumentFetcher",
    "StateRepository",
]
