"""Dash0 API connection settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import httpx

from .errors import ConfigurationError, MissingConfigurationError

API_URL_ENV = "DASH0_URL"
API_TOKEN_ENV = "DASH0_AUTH_TOKEN"
API_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries for idempotent reads of a synthetic check."""

    total: int = 3
    backoff_factor: float = 0.5
    backoff_jitter: float = 1.0
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(frozen=True)
class ApiConfig:
    """Holds the API endpoint and credentials used to read synthetic checks."""

    base_url: str
    auth_token: str = field(repr=False)
    timeout_seconds: float = API_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = field(default_factory=lambda: RateLimit(10, 1.0))

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.auth_token}",
            "Accept": "application/json",
        }


def get_api_config() -> ApiConfig:
    values = _require_env(API_URL_ENV, API_TOKEN_ENV)
    return ApiConfig(
        base_url=_parse_base_url(values[API_URL_ENV]),
        auth_token=values[API_TOKEN_ENV],
    )


def _require_env(*names: str) -> dict[str, str]:
    values = {name: (os.getenv(name) or "").strip() for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingConfigurationError(missing)
    return values


def _parse_base_url(raw: str) -> str:
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(API_URL_ENV, f"is not a valid URL: {exc}", value=raw) from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise ConfigurationError(API_URL_ENV, "must be an http(s) URL with a host", value=raw)
    return raw.rstrip("/")
