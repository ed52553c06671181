"""Response DTOs for API endpoints.

Successful analyze responses are the raw upstream body and have no model.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response DTO for every analyze error."""

    error: str = Field(..., description="Stable machine-readable error code")
    status: int | None = Field(None, description="Upstream HTTP status (upstream_error only)")
    detail: str | None = Field(None, description="First 300 characters of the upstream error body")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    upstream_configured: bool = Field(..., description="Whether an upstream URL is configured")
