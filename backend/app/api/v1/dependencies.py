"""
API Dependencies
Shared dependencies for record store access and view configuration
"""
from functools import lru_cache

from supabase import create_client, Client
from dotenv import load_dotenv

from app.core.config import get_settings
from app.domain.interfaces.record_store import RecordStore
from app.infrastructure.storage.supabase_store import SupabaseRecordStore
from app.services.dashboard_views import ViewOptions

load_dotenv()


def get_supabase() -> Client:
    """
    Get Supabase client with validation.

    Raises:
        RuntimeError: If Supabase URL or SERVICE_KEY is not configured
    """
    settings = get_settings()
    url = settings.supabase_url
    key = settings.supabase_service_key

    if not url:
        raise RuntimeError(
            "SUPABASE_URL is not configured. "
            "Set SUPABASE_URL environment variable."
        )
    if not key:
        raise RuntimeError(
            "SUPABASE_SERVICE_KEY is not configured. "
            "Set SUPABASE_SERVICE_KEY environment variable."
        )

    return create_client(url, key)


def get_record_store() -> RecordStore:
    """Record store for one request."""
    return SupabaseRecordStore(get_supabase())


@lru_cache()
def get_view_options() -> ViewOptions:
    """View knobs from config/default.yaml (loaded once)."""
    return ViewOptions.from_config()
