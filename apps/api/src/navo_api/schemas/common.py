"""Shared response schemas."""

from __future__ import annotations

from typing import Any

from navo_core.schemas import CamelModel


class FieldError(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    """Standard error payload."""

    code: str
    message: str
    errors: list[FieldError] | None = None
    details: dict[str, Any] | None = None
    request_id: str | None = None
