"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    code: str = Field(..., description="Machine-readable error kind")
    detail: str = Field(..., description="Human-readable message")
    errors: dict[str, str] | None = Field(
        None, description="Per-field messages for validation failures"
    )
