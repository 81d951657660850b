"""
StackIt Backend: Shared API Schemas
====================================

What:  Error and health response models used across all routers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for every StackItError.

    Example:
        {
            "error": "validation_error",
            "message": "At least one tag is required",
            "details": {"field": "tags"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    repository: str = Field(description="Active repository backend: memory, database")
    database: str = Field(description="connected, disconnected, or not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
