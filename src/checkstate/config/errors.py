"""Errors raised while reading the Dash0 connection settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """An environment variable holds a value checkstate cannot use.

    ``value`` is kept for diagnostics only and is never set for secrets.
    """

    def __init__(self, variable: str, reason: str, *, value: str | None = None) -> None:
        shown = f" (got {value!r})" if value is not None else ""
        super().__init__(f"{variable} {reason}{shown}")
        self.variable = variable
        self.reason = reason
        self.value = value


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are absent or blank."""

    def __init__(self, variables: Iterable[str]) -> None:
        self.variables = tuple(sorted(variables))
        super().__init__(", ".join(self.variables), "must be set to a non-blank value")
