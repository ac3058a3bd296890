"""FastAPI main application module."""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.staticfiles import StaticFiles

from app.config.database import dispose_engine, init_models
from app.config.settings import settings
from app.middleware.exception_handler import register_exception_handlers
from app.middleware.logging_middleware import PerformanceMiddleware, RequestLoggingMiddleware
from app.routers import auth, media, properties, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
)

# Register exception handlers
register_exception_handlers(app)

# Security middleware
if settings.ENVIRONMENT == "production":
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["*"],  # Configure with actual domains in production
    )

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
)

# Request/Response logging middleware (should be early in the stack)
app.add_middleware(
    RequestLoggingMiddleware,
    log_body=settings.ENVIRONMENT != "production",  # Don't log bodies in production
    log_headers=settings.ENVIRONMENT == "development",
    max_body_size=2048,
)

# Performance monitoring middleware
app.add_middleware(
    PerformanceMiddleware,
    slow_request_threshold=settings.SLOW_REQUEST_THRESHOLD,
)

# Uploaded media
app.mount(
    settings.MEDIA_URL_PATH,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    await init_models()
    logger.info(
        "Application started",
        extra={"environment": settings.ENVIRONMENT, "version": settings.API_VERSION},
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    await dispose_engine()


# Health check endpoints
def _health() -> dict:
    return {
        "status": "UP",
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
async def api_health_check():
    """Health check endpoint under the API prefix."""
    return _health()


# Include routers
app.include_router(
    auth.router,
    prefix=f"{settings.API_PREFIX}/auth",
    tags=["Authentication"],
)

app.include_router(
    users.router,
    prefix=f"{settings.API_PREFIX}/users",
    tags=["Users"],
)

app.include_router(
    properties.router,
    prefix=f"{settings.API_PREFIX}/properties",
    tags=["Properties"],
)

app.include_router(
    media.router,
    prefix=settings.API_PREFIX,
    tags=["Media"],
)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs_url": f"{settings.API_PREFIX}/docs",
    }
