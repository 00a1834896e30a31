"""Ports for fetching the remote representation of a synthetic check."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from checkstate.domain.model import RemoteDocument


@runtime_checkable
class RemoteDocumentFetcher(Protocol):
    """Callable port returning the remote system's current document.

    Implementations raise ``FetchError`` (or a subclass) for transport,
    authentication and lookup failures. Retries and backoff belong to the
    implementation; callers see a single attempt.
    """

    def __call__(self, *, origin: str, dataset: str) -> RemoteDocument: ...


__all__ = ["RemoteDocumentFetcher"]
