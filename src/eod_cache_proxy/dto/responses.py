"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ServiceInfoResponse(BaseModel):
    """Response DTO for the root endpoint."""

    name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    upstream: str = Field(..., description="Upstream origin all requests are forwarded to")
    mount_prefix: str = Field(..., description="Path prefix that is proxied")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    upstream: str = Field(..., description="Upstream origin")
    cache_backend: str = Field(..., description="HTTP cache backend: memory, file, redis or none")
