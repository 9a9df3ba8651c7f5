"""API response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness status."""

    status: str = "healthy"
    uptime_seconds: float
    advanced_validation: bool
