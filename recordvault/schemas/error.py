"""Error response body shared by all exception handlers."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx JSON response."""

    error: str = Field(..., description="Machine-readable error code")
    message: str
    details: Any = None
