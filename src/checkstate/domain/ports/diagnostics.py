"""Port for surfacing diagnostics without aborting the surrounding operation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from checkstate.domain.model import Severity


@runtime_checkable
class DiagnosticsReporter(Protocol):
    def __call__(self, severity: Severity, message: str) -> None: ...


__all__ = ["DiagnosticsReporter"]
