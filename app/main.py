"""Product catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.api.health import router as health_router
from app.api.middleware import setup_middleware
from app.api.products import router as products_router
from app.infrastructure.config import settings
from app.infrastructure.database import engine, init_models
from app.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings)
    logger.info(
        "Starting product catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    if settings.create_tables_on_startup:
        await init_models()
        logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info("Shutting down product catalog API")
    await engine.dispose()


app = FastAPI(
    title="Product Catalog API",
    description="Product catalog: CRUD, search, availability and inventory",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
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


def _field_name(loc: tuple[str | int, ...]) -> str:
    """Field name from a validation error location.

    Drops the request part ("body", "query", "path") and list indexes.
    """
    parts = [str(part) for part in loc[1:] if not isinstance(part, int)]
    if not parts:
        return str(loc[0]) if loc else "request"
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors as a field -> message map."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "invalid"))

    logger.info(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        fields=sorted(errors),
    )

    return JSONResponse(status_code=400, content=errors)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions.

    Dict details are sent as the body unchanged; anything else becomes
    ``{status, message}``.
    """
    detail = exc.detail
    if isinstance(detail, dict):
        content = detail
    else:
        content = {"status": exc.status_code, "message": str(detail)}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )
