"""HTTP fetcher for synthetic checks stored in Dash0."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from checkstate.adapters.http_resilience import ResilientClient
from checkstate.config.api import ApiConfig, get_api_config
from checkstate.domain.model import (
    AuthenticationError,
    CheckNotFoundError,
    FetchError,
    RemoteDocument,
)
from checkstate.domain.ports.fetching import RemoteDocumentFetcher

from .schema import ErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)

SYNTHETIC_CHECKS_PATH = "/api/synthetic-checks"
_MAX_ERROR_BODY_CHARS = 200


def _default_client_factory(config: ApiConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class Dash0SyntheticCheckFetcher:
    """Read the current definition of one synthetic check.

    The raw response body is returned untouched; interpreting it is the
    reconciliation core's job.
    """

    config: ApiConfig = field(default_factory=get_api_config)
    client_factory: Callable[[ApiConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, *, origin: str, dataset: str) -> RemoteDocument:
        return asyncio.run(self.fetch(origin=origin, dataset=dataset))

    async def fetch(self, *, origin: str, dataset: str) -> RemoteDocument:
        url = f"{SYNTHETIC_CHECKS_PATH}/{quote(origin, safe='')}"
        async with self.client_factory(self.config) as client:
            try:
                response = await client.get(url, params={"dataset": dataset})
            except httpx.HTTPError as exc:
                log.debug(f"Request for synthetic check {origin} failed: {exc}")
                raise FetchError(
                    f"request failed: {exc}", origin=origin, dataset=dataset
                ) from exc

        if response.is_success:
            return RemoteDocument(origin=origin, dataset=dataset, document=response.text)
        raise _error_for_response(response, origin=origin, dataset=dataset)


def _error_for_response(response: httpx.Response, *, origin: str, dataset: str) -> FetchError:
    status = response.status_code
    detail = _error_message(response)
    message = f"API responded with {status}: {detail}"
    log.debug(f"Synthetic check {origin} in dataset {dataset}: {message}")
    if status in {401, 403}:
        return AuthenticationError(message, origin=origin, dataset=dataset, status_code=status)
    if status == 404:
        return CheckNotFoundError(message, origin=origin, dataset=dataset, status_code=status)
    return FetchError(message, origin=origin, dataset=dataset, status_code=status)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate_json(response.content).error.message
    except ValidationError:
        text = response.text.strip()
        if not text:
            return response.reason_phrase or "no response body"
        return text[:_MAX_ERROR_BODY_CHARS]


if TYPE_CHECKING:
    _fetcher_check: RemoteDocumentFetcher = Dash0SyntheticCheckFetcher()
