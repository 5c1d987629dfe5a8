"""
Catalogue API - Shared Response Schemas
========================================

What:  Column bounds shared by schemas and routes, and response models that
       are not tied to a single resource: plain messages, dashboard counts,
       errors and the health check.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Column bounds: ids are INTEGER, prices NUMERIC(10, 2)
MAX_ID = 2**31 - 1
MAX_PRICE = 99_999_999.99


class MessageResponse(BaseModel):
    """Body of the DELETE routes."""
    message: str = Field(description="Human-readable outcome")


class DashboardResponse(BaseModel):
    """Counts shown on the dashboard."""
    categories: int = Field(ge=0, description="Number of categories")
    produits: int = Field(ge=0, description="Number of products")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Produit non trouvé",
            "request_id": "1f0c2a9b"
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
