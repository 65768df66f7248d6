"""Pydantic schemas for API responses."""

from pydantic import BaseModel

from ..core.models import Application

# The apps endpoint returns Application records as-is
ApplicationResponse = Application


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str = "healthy"


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""
    error: str
