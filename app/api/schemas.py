"""API schemas for the catalog HTTP surface.

Error and status bodies. Product shapes live in ``app.catalog.schemas``.
"""

from pydantic import BaseModel, Field, RootModel


class ErrorResponse(BaseModel):
    """Error body for not-found and internal failures."""

    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable error message")


class FieldErrorsResponse(RootModel[dict[str, str]]):
    """Validation error body: one message per offending field."""


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
