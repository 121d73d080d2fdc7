"""
SampleWeb Backend - Health and Error Response Schemas
=====================================================

What:  Pydantic models for the JSON responses of the application: the
       health report and the shared error body.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all request failures.

    Fields:
        error: Machine-readable error code (e.g., "missing_parameter")
        message: Human-readable description
        details: Optional extra context (e.g., which parameter failed)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "type_mismatch",
            "message": "Failed to convert value 'abc' of parameter 'price' to required type 'int'",
            "details": {"parameter": "price", "value": "abc", "target_type": "int"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Liveness report returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    templates: str = Field(description="Template root status: available, missing")
    uptime_seconds: float = Field(description="Seconds since service started")
