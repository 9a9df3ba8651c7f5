"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from ingress_validator.metrics import InMemoryMetrics
from ingress_validator.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/healthz", response_model=HealthResponse)
async def health_check(request: Request):
    """Liveness check with the active validation mode."""
    return HealthResponse(
        uptime_seconds=round(time.time() - _start_time, 2),
        advanced_validation=request.app.state.validator.enable_advanced_validation,
    )


@router.get("/metrics")
async def metrics(request: Request):
    """Validation counters, when the sink keeps them in memory."""
    sink = request.app.state.validator.metrics
    if isinstance(sink, InMemoryMetrics):
        return sink.snapshot()
    return {}
