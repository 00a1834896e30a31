from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from checkstate.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_api_config,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


def test_get_api_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASH0_URL", " https://api.eu-west-1.aws.dash0.com/ ")
    monkeypatch.setenv("DASH0_AUTH_TOKEN", "auth_abc")

    config = get_api_config()

    assert config.base_url == "https://api.eu-west-1.aws.dash0.com"
    assert config.default_headers["Authorization"] == "Bearer auth_abc"
    assert config.ratelimit is not None
    assert "auth_abc" not in repr(config)


def test_get_api_config_lists_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DASH0_URL", raising=False)
    monkeypatch.setenv("DASH0_AUTH_TOKEN", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        get_api_config()

    assert exc.value.variables == ("DASH0_AUTH_TOKEN", "DASH0_URL")
    assert "DASH0_AUTH_TOKEN, DASH0_URL" in str(exc.value)
    assert exc.value.value is None


@pytest.mark.parametrize("url", ["api.dash0.com", "ftp://api.dash0.com", "https://"])
def test_get_api_config_rejects_unusable_urls(
    monkeypatch: pytest.MonkeyPatch,
    url: str,
) -> None:
    monkeypatch.setenv("DASH0_URL", url)
    monkeypatch.setenv("DASH0_AUTH_TOKEN", "auth_abc")

    with pytest.raises(ConfigurationError) as exc:
        get_api_config()

    assert exc.value.variable == "DASH0_URL"
    assert exc.value.value == url
    assert repr(url) in str(exc.value)
    assert "auth_abc" not in str(exc.value)


@pytest.fixture
def request_loggers() -> Iterator[list[logging.Logger]]:
    loggers = [logging.getLogger("httpx"), logging.getLogger("httpcore")]
    saved = [logger.level for logger in loggers]
    yield loggers
    for logger, level in zip(loggers, saved, strict=True):
        logger.setLevel(level)


@pytest.mark.parametrize(("verbose", "expected"), [(False, logging.WARNING), (True, logging.DEBUG)])
def test_configure_logging_quiets_request_logs_unless_verbose(
    request_loggers: list[logging.Logger],
    verbose: bool,
    expected: int,
) -> None:
    configure_logging(verbose=verbose)

    assert [logger.level for logger in request_loggers] == [expected, expected]
