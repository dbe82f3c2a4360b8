"""
FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager
from typing import Dict
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.routes import api_router
from app.api.v1.endpoints import health
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan - startup and shutdown events.

    Startup:
    - Validates record store configuration (fatal in production)
    """
    logger.info("Starting Call Review Dashboard API...")

    settings = get_settings()
    strict_validation = settings.is_production

    try:
        from app.core.validation import validate_config_on_startup
        validate_config_on_startup(strict=strict_validation)
    except RuntimeError as e:
        if strict_validation:
            logger.error(f"Startup failed: {e}")
            raise
        logger.warning(f"Configuration warnings (non-fatal in {settings.environment}): {e}")

    logger.info("Call Review Dashboard API started successfully")

    yield  # Application is running

    logger.info("Call Review Dashboard API shutdown complete")


settings = get_settings()

app = FastAPI(
    title="Call Review Dashboard",
    description="Review voice-agent calls, semantic analyses and scheduled meetings",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(health.router)
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root() -> Dict[str, str]:
    """API banner with the docs location and the view routes prefix."""
    return {
        "message": "Call Review Dashboard API",
        "version": app.version,
        "docs": app.docs_url,
        "views": settings.api_prefix
    }
