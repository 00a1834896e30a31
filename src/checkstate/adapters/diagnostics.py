"""Diagnostics reporter adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from checkstate.domain.model import Diagnostic, Severity

if TYPE_CHECKING:
    from checkstate.domain.ports import DiagnosticsReporter

log = logging.getLogger(__name__)

_LEVELS = {
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(slots=True)
class LoggingDiagnosticsReporter:
    """Forward diagnostics to a logger at the matching level."""

    logger: logging.Logger = field(default=log)

    def __call__(self, severity: Severity, message: str) -> None:
        self.logger.log(_LEVELS[severity], message)


@dataclass(slots=True)
class CollectingDiagnosticsReporter:
    """Keep diagnostics in memory, optionally forwarding them to another reporter."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    forward: DiagnosticsReporter | None = None

    def __call__(self, severity: Severity, message: str) -> None:
        self.diagnostics.append(Diagnostic(severity, message))
        if self.forward is not None:
            self.forward(severity, message)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [item for item in self.diagnostics if item.severity is Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [item for item in self.diagnostics if item.severity is Severity.ERROR]
