"""Checkout Gate - Main FastAPI Application

Checkout-time basket validation for the order pipeline.

This module creates and configures the main FastAPI application, including:
- API routers (checkout validation, observability)
- Middleware (request ID correlation)
- Exception handlers mapping gate errors to HTTP responses
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from config import get_settings
from domain.checkout.exceptions import DataIntegrityError, InventoryLookupError
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from api.v1.checkout.router import router as checkout_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Checkout gate starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Inventory strategy: {settings.INVENTORY_STRATEGY}")

    yield

    logger.info("Checkout gate shutting down...")


app = FastAPI(
    title="Checkout Gate API",
    description="Checkout-time basket validation",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors of the basket snapshot."""
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"errors": exc.errors()}
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


@app.exception_handler(DataIntegrityError)
async def data_integrity_exception_handler(
    request: Request,
    exc: DataIntegrityError
) -> JSONResponse:
    """Missing or malformed inventory/class data: no decision can be made."""
    logger.error(
        f"Data integrity error on {request.method} {request.url.path}: {exc}",
        extra={"details": exc.details}
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "data_integrity_error",
            "message": str(exc),
            "details": exc.details,
        },
    )


@app.exception_handler(InventoryLookupError)
async def inventory_lookup_exception_handler(
    request: Request,
    exc: InventoryLookupError
) -> JSONResponse:
    logger.error(f"Inventory lookup error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "inventory_unavailable",
            "message": "Store inventory could not be retrieved. Please try again later.",
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions.

    Full details are logged but not exposed to the client.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    # ctx may hold the raised ValueError instance, which is not JSON serializable
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(observability_router)
app.include_router(checkout_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    return {"name": "checkout-gate", "version": "0.1.0", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
