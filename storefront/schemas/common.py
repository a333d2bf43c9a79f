"""Common schemas used across the API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail


class AlertOut(BaseModel):
    """A buffered cart/wishlist alert."""

    severity: str
    message: str
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}
