"""
FastAPI application entry point for Global Gourmet Scout backend.

This module creates the FastAPI app instance, owns the shared resources
(storage service, HTTP client) and registers all routers.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scout.config import settings
from scout.routes.favorites import router as favorites_router
from scout.routes.health import router as health_router
from scout.routes.search import router as search_router
from scout.routes.settings import router as settings_router
from scout.services.storage import build_storage_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Reduce noise from external libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - anything else: Allows all origins for local dev

    Native mobile shells don't send Origin headers, so CORS mostly matters
    for the web build.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the storage service and the shared HTTP client."""
    app.state.storage = build_storage_service(settings)
    # No explicit timeout policy; httpx defaults apply
    app.state.http_client = httpx.AsyncClient(follow_redirects=True)
    logger.info("Shared resources initialized")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("Shared resources closed")


# Create FastAPI app
app = FastAPI(
    title="Global Gourmet Scout API",
    description="Backend service for the Global Gourmet Scout app: top viral restaurants for any city",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    This helps diagnose 422 errors from the frontend.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc),
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with non-JSON context (e.g. exception objects) stringified."""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        errors.append(error)
    return errors


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(search_router)
app.include_router(favorites_router)
app.include_router(settings_router)

logger.info("FastAPI app initialized successfully")
