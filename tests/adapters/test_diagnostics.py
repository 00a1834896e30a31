from __future__ import annotations

import logging

import pytest

from checkstate.adapters.diagnostics import (
    CollectingDiagnosticsReporter,
    LoggingDiagnosticsReporter,
)
from checkstate.domain.model import Diagnostic, Severity
from checkstate.domain.ports import DiagnosticsReporter


def test_logging_reporter_logs_at_matching_level(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LoggingDiagnosticsReporter()

    with caplog.at_level(logging.WARNING, logger="checkstate.adapters.diagnostics"):
        reporter(Severity.WARNING, "stale state")
        reporter(Severity.ERROR, "fetch failed")

    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.WARNING, "stale state"),
        (logging.ERROR, "fetch failed"),
    ]


def test_collecting_reporter_splits_by_severity() -> None:
    forwarded: list[tuple[Severity, str]] = []

    class _Forward(LoggingDiagnosticsReporter):
        def __call__(self, severity: Severity, message: str) -> None:
            forwarded.append((severity, message))

    reporter = CollectingDiagnosticsReporter(forward=_Forward())
    reporter(Severity.WARNING, "w")
    reporter(Severity.ERROR, "e")

    assert reporter.warnings == [Diagnostic(Severity.WARNING, "w")]
    assert reporter.errors == [Diagnostic(Severity.ERROR, "e")]
    assert forwarded == [(Severity.WARNING, "w"), (Severity.ERROR, "e")]


def test_reporters_satisfy_port() -> None:
    assert isinstance(LoggingDiagnosticsReporter(), DiagnosticsReporter)
    assert isinstance(CollectingDiagnosticsReporter(), DiagnosticsReporter)
