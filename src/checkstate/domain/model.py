"""Domain values for synthetic check state reconciliation.

Everything here is immutable. A reconciliation never edits a record in place;
it hands back either the same record or a new one carrying the fetched text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TypeAlias


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"


class Outcome(StrEnum):
    UNCHANGED = "unchanged"
    REPLACED = "replaced"
    REPLACED_WITH_WARNING = "replaced_with_warning"


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """Locally persisted synthetic check definition."""

    origin: str
    dataset: str
    document: str

    def with_document(self, document: str) -> StoredRecord:
        return replace(self, document=document)


@dataclass(frozen=True, slots=True)
class RemoteDocument:
    """The remote API's current text for one synthetic check."""

    origin: str
    dataset: str
    document: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str


@dataclass(frozen=True, slots=True)
class ParseError:
    """Why a document could not be read as a structured mapping."""

    reason: str
    offset: int | None = None

    def __str__(self) -> str:
        if self.offset is None:
            return self.reason
        return f"{self.reason} (at offset {self.offset})"


@dataclass(frozen=True, slots=True)
class NormalizedDocument:
    """Canonical tree of a document with server-owned fields removed.

    Produced for comparison only and never written back to state.
    """

    root: Mapping[str, object] = field(default_factory=dict)
    policy_version: int = 0


class FetchError(RuntimeError):
    """Raised by fetch ports when the remote document cannot be retrieved."""

    def __init__(
        self,
        message: str,
        *,
        origin: str,
        dataset: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.origin = origin
        self.dataset = dataset
        self.status_code = status_code


class CheckNotFoundError(FetchError):
    """The remote API has no synthetic check for the given origin/dataset."""


class AuthenticationError(FetchError):
    """The remote API rejected the configured credentials."""


@dataclass(frozen=True, slots=True)
class ReconciliationVerdict:
    """Terminal output of one successful reconciliation.

    ``record`` is what the caller should persist: the stored record itself when
    nothing significant changed, otherwise a copy holding the raw fetched text.
    """

    outcome: Outcome
    record: StoredRecord
    diagnostic: Diagnostic | None = None

    @property
    def changed(self) -> bool:
        return self.outcome is not Outcome.UNCHANGED

    @property
    def replacement(self) -> StoredRecord | None:
        return self.record if self.changed else None


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Result of a reconciliation whose remote fetch failed.

    The stored record is carried through untouched so callers can keep it.
    """

    record: StoredRecord
    error: FetchError
    diagnostic: Diagnostic

    @property
    def changed(self) -> bool:
        return False


ReconciliationResult: TypeAlias = ReconciliationVerdict | FetchFailure


__all__ = [
    "AuthenticationError",
    "CheckNotFoundError",
    "Diagnostic",
    "FetchError",
    "FetchFailure",
    "NormalizedDocument",
    "Outcome",
    "ParseError",
    "ReconciliationResult",
    "ReconciliationVerdict",
    "RemoteDocument",
    "Severity",
    "StoredRecord",
]
