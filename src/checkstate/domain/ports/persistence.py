"""Ports for loading and committing stored synthetic check records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from checkstate.domain.model import StoredRecord


@runtime_checkable
class StateRepository(Protocol):
    """Persistence contract for stored records.

    ``persist`` replaces the record with the same origin and dataset as a whole.
    The reconciliation core never calls it; the application layer does, using
    the record carried on each verdict.
    """

    def load(self) -> list[StoredRecord]: ...

    def persist(self, record: StoredRecord) -> None: ...


__all__ = ["StateRepository"]
