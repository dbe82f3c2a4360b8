"""
Health Check Endpoint
Reports whether the record store this service reads from is configured
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends, status

from app.core.config import Settings, get_settings

router = APIRouter(tags=["health"])

SERVICE_NAME = "call-review-backend"


def record_store_configured(settings: Settings) -> bool:
    """Both the Supabase URL and service key are needed before any view can load."""
    return bool(settings.supabase_url and settings.supabase_service_key)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    """
    Liveness plus record store readiness.

    The process is up either way; "degraded" means every dashboard view
    would fail until SUPABASE_URL and SUPABASE_SERVICE_KEY are set.
    """
    configured = record_store_configured(settings)
    return {
        "status": "healthy" if configured else "degraded",
        "record_store": "configured" if configured else "missing",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME
    }
