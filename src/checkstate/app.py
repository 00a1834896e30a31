"""Application services wiring the reconciliation core to its adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from checkstate.adapters.dash0 import Dash0SyntheticCheckFetcher
from checkstate.adapters.diagnostics import LoggingDiagnosticsReporter
from checkstate.domain.model import FetchFailure, Outcome, StoredRecord
from checkstate.domain.reconciliation import DEFAULT_POLICY, SyntheticCheckReconciler, decide

if TYPE_CHECKING:
    from checkstate.domain.model import ReconciliationVerdict
    from checkstate.domain.ports import (
        DiagnosticsReporter,
        RemoteDocumentFetcher,
        StateRepository,
    )
    from checkstate.domain.reconciliation import IgnorePolicy

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RefreshSummary:
    unchanged: int = 0
    replaced: int = 0
    replaced_with_warning: int = 0
    failures: list[FetchFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.unchanged + self.replaced + self.replaced_with_warning + len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


def refresh_state(
    repository: StateRepository,
    *,
    fetch: RemoteDocumentFetcher | None = None,
    policy: IgnorePolicy = DEFAULT_POLICY,
    report: DiagnosticsReporter | None = None,
) -> RefreshSummary:
    """Reconcile every stored record and persist the ones that changed.

    A fetch failure for one record leaves that record as stored and does not
    stop the others.
    """

    reconciler = SyntheticCheckReconciler(
        fetch=fetch or Dash0SyntheticCheckFetcher(),
        policy=policy,
        report=report or LoggingDiagnosticsReporter(),
    )
    summary = RefreshSummary()
    records = repository.load()
    log.info("Refreshing %d synthetic check(s)", len(records))

    for record in records:
        result = reconciler.reconcile(record)
        if isinstance(result, FetchFailure):
            summary.failures.append(result)
            continue
        if result.changed:
            repository.persist(result.record)
        match result.outcome:
            case Outcome.UNCHANGED:
                summary.unchanged += 1
            case Outcome.REPLACED:
                summary.replaced += 1
            case Outcome.REPLACED_WITH_WARNING:
                summary.replaced_with_warning += 1

    log.info(
        "Refresh finished: %d unchanged, %d replaced, %d replaced with warning, %d failed",
        summary.unchanged,
        summary.replaced,
        summary.replaced_with_warning,
        len(summary.failures),
    )
    return summary


def compare_documents(
    local: str,
    remote: str,
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> ReconciliationVerdict:
    """Offline verdict for two documents, without any fetch."""

    record = StoredRecord(origin="local", dataset="default", document=local)
    return decide(record, remote, policy=policy)
