"""Product catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_catalog.api.health import router as health_router
from product_catalog.api.middleware import setup_middleware
from product_catalog.api.products import router as products_router
from product_catalog.domain.exceptions import (
    BulkDeleteDisabledError,
    DomainError,
    DuplicateKeyError,
    InternalError,
    ProductNotFoundError,
)
from product_catalog.infrastructure import database
from product_catalog.infrastructure.config import settings
from product_catalog.infrastructure.logging import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting product catalog API",
        version=settings.api_version,
        debug=settings.debug,
        bulk_delete_enabled=settings.allow_bulk_delete,
    )

    yield

    logger.info("Shutting down product catalog API")
    await database.engine.dispose()


app = FastAPI(
    title="Product Catalog API",
    description="CRUD over products and their images",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (ProductNotFoundError, status.HTTP_404_NOT_FOUND, "PRODUCT_NOT_FOUND"),
    (DuplicateKeyError, status.HTTP_400_BAD_REQUEST, "DUPLICATE_KEY"),
    (BulkDeleteDisabledError, status.HTTP_403_FORBIDDEN, "BULK_DELETE_DISABLED"),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"),
]

HTTP_ERROR_CODES: dict[int, str] = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _domain_exception_handler(status_code: int, error_code: str):
    async def handler(request: Request, exc: DomainError) -> JSONResponse:
        return _error_response(request, status_code, error_code, exc.message)

    return handler


for _error_type, _status_code, _error_code in DOMAIN_ERROR_STATUS:
    app.add_exception_handler(_error_type, _domain_exception_handler(_status_code, _error_code))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing and HTTP exceptions with consistent format."""
    error_code = HTTP_ERROR_CODES.get(exc.status_code, "ERROR")
    response = _error_response(request, exc.status_code, error_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response
