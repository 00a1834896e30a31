"""Decide whether a stored synthetic check must be overwritten by the remote one.

The engine composes the normalization and comparison stages around a single
call to the fetch port. It holds no state between calls and performs no I/O
itself, so one instance can serve any number of records.

Outcomes:
- fetch fails: ``FetchFailure`` with an error diagnostic, stored record kept
- either document fails to parse: replace with the raw fetched text and warn
- documents equivalent under the ignore policy: keep the stored record
- documents differ: replace with the raw fetched text
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from checkstate.domain.model import (
    Diagnostic,
    FetchError,
    FetchFailure,
    Outcome,
    ReconciliationVerdict,
    Severity,
)

from .compare import differences
from .normalize import normalize
from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from checkstate.domain.model import ParseError, ReconciliationResult, StoredRecord
    from checkstate.domain.ports import DiagnosticsReporter, RemoteDocumentFetcher

    from .policy import IgnorePolicy

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SyntheticCheckReconciler:
    """Reconcile stored records against the remote API through ``fetch``."""

    fetch: RemoteDocumentFetcher
    policy: IgnorePolicy = DEFAULT_POLICY
    report: DiagnosticsReporter | None = None

    def reconcile(self, record: StoredRecord) -> ReconciliationResult:
        try:
            remote = self.fetch(origin=record.origin, dataset=record.dataset)
        except FetchError as exc:
            log.debug("Fetch failed for origin=%s dataset=%s", record.origin, record.dataset)
            failure = FetchFailure(
                record=record,
                error=exc,
                diagnostic=Diagnostic(
                    Severity.ERROR,
                    f"Unable to read synthetic check {record.origin!r} "
                    f"in dataset {record.dataset!r}: {exc}",
                ),
            )
            self._emit(failure.diagnostic)
            return failure

        verdict = decide(record, remote.document, policy=self.policy)
        if verdict.diagnostic is not None:
            self._emit(verdict.diagnostic)
        return verdict

    def reconcile_many(self, records: Iterable[StoredRecord]) -> list[ReconciliationResult]:
        return [self.reconcile(record) for record in records]

    def _emit(self, diagnostic: Diagnostic) -> None:
        if self.report is not None:
            self.report(diagnostic.severity, diagnostic.message)


def reconcile(
    record: StoredRecord,
    fetch: RemoteDocumentFetcher,
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
    report: DiagnosticsReporter | None = None,
) -> ReconciliationResult:
    """Fetch the remote document for ``record`` and return the verdict."""

    return SyntheticCheckReconciler(fetch=fetch, policy=policy, report=report).reconcile(record)


def decide(
    record: StoredRecord,
    fetched: str,
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> ReconciliationVerdict:
    """Compare ``record`` with already fetched text; no diagnostics are emitted."""

    local = normalize(record.document, policy=policy)
    remote = normalize(fetched, policy=policy)

    if local.document is None or remote.document is None:
        message = _parse_failure_message(record, local.error, remote.error)
        log.debug("Replacing origin=%s after parse failure", record.origin)
        return ReconciliationVerdict(
            outcome=Outcome.REPLACED_WITH_WARNING,
            record=record.with_document(fetched),
            diagnostic=Diagnostic(Severity.WARNING, message),
        )

    changed_paths = differences(local.document, remote.document, policy=policy)
    if not changed_paths:
        log.debug("No significant changes for origin=%s", record.origin)
        return ReconciliationVerdict(outcome=Outcome.UNCHANGED, record=record)

    log.info(
        "Synthetic check %s changed remotely: %s",
        record.origin,
        "; ".join(str(difference) for difference in changed_paths),
    )
    return ReconciliationVerdict(outcome=Outcome.REPLACED, record=record.with_document(fetched))


def _parse_failure_message(
    record: StoredRecord,
    local_error: ParseError | None,
    remote_error: ParseError | None,
) -> str:
    parts: list[str] = []
    if remote_error is not None:
        parts.append(f"the API response could not be parsed ({remote_error})")
    if local_error is not None:
        parts.append(f"the stored definition could not be parsed ({local_error})")
    reasons = " and ".join(parts)
    return (
        f"Synthetic check {record.origin!r}: {reasons}; "
        "the raw API response was stored as the new state"
    )


__all__ = ["SyntheticCheckReconciler", "decide", "reconcile"]
