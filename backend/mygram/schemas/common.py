"""
MyGram Backend - Shared Pydantic Schemas
=========================================

What:  Response models used by every resource (errors, messages, owner
       summaries, health) and field helpers shared by the resource schemas.
"""

from typing import Optional

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_url_adapter = TypeAdapter(AnyUrl)


def ensure_url(value: str) -> str:
    """
    Check that `value` is a well-formed absolute URL and return it unchanged.

    The string is stored as sent (no trailing-slash or case normalization)
    so that what a client posts is exactly what it reads back.
    """
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a well-formed URL")
    return value


class OwnerSummary(BaseModel):
    """Public projection of a user embedded in list responses."""

    id: int = Field(description="User ID")
    username: str
    email: str

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Plain confirmation, e.g. after a delete."""

    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "forbidden")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
