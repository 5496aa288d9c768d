"""
Shopfront Backend: Shared Response Schemas
==========================================

What:  Error, delete-confirmation and health payloads shared by every router.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DeleteResponse(BaseModel):
    """Confirmation returned by every DELETE endpoint."""
    deleted: int = Field(description="Number of rows removed (1 on success)")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which fields failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "validation_error",
            "message": "Please provide product name, price, and stock.",
            "details": {"missing_fields": ["price"]},
            "request_id": "3f2a9c1b"
        }
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
