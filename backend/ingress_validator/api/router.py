"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from ingress_validator.api.health import router as health_router
from ingress_validator.api.admission import router as admission_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Admission webhook
api_router.include_router(admission_router, tags=["Admission"])
