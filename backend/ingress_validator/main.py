"""Ingress annotation validator — admission webhook service.

Main FastAPI application with lifespan management and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ingress_validator.config import get_settings
from ingress_validator.api.router import api_router
from ingress_validator.definitions import get_validator

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if get_settings().DEBUG else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().LOG_LEVEL.upper())
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    app.state.validator = get_validator()
    logger.info(
        "validator_ready",
        validator=app.state.validator.name,
        advanced_validation=app.state.validator.enable_advanced_validation,
        filters=len(app.state.validator.filter_registry),
        predicates=len(app.state.validator.predicate_specs),
    )

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Ingress Annotation Validator",
    description=(
        "Admission webhook validating the eskip filter, predicate and "
        "routes annotations of ingress resources."
    ),
    version="1.0.0",
    lifespan=lifespan,
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies that are not a valid AdmissionReview."""
    logger.info(
        "bad_request_body",
        path=request.url.path,
        method=request.method,
        errors=len(exc.errors()),
    )
    return JSONResponse(
        status_code=400,
        content={"error": "bad_request", "message": str(exc)},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle malformed input."""
    return JSONResponse(
        status_code=400,
        content={"error": "bad_request", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router)


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — service info."""
    return {
        "name": "Ingress Annotation Validator",
        "version": "1.0.0",
        "admission": "/ingresses",
        "health": "/healthz",
    }
