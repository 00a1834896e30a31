"""Pydantic models describing Dash0 API error payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, model_validator


class Dash0BaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorDetail(Dash0BaseModel):
    message: str
    code: int | None = None
    trace_id: str | None = None


class ErrorResponse(Dash0BaseModel):
    """Error envelope returned by the API on non-2xx responses.

    Some endpoints nest the detail under ``error``, others put ``message`` at
    the top level; both shapes validate into the nested form.
    """

    error: ErrorDetail

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_error(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "error" not in mapping_value and "message" in mapping_value:
                return {"error": dict(mapping_value)}
            error_value = mapping_value.get("error")
            if isinstance(error_value, str):
                return {"error": {"message": error_value}}
        return value
