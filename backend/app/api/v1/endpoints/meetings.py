"""
Meetings Endpoints
Provides calls with a scheduled tour date
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import MeetingFilters
from app.services.dashboard_views import VIEW_ERRORS, MeetingsView, ViewOptions, load_meetings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["meetings"])


@router.get("/", response_model=MeetingsView)
async def list_meetings(
    search: str = Query("", description="Substring of the name or phone number"),
    start_date: str = Query("", description="Earliest tour date (YYYY-MM-DD)"),
    end_date: str = Query("", description="Latest tour date (YYYY-MM-DD)"),
    store: RecordStore = Depends(get_record_store),
    options: ViewOptions = Depends(get_view_options)
):
    """
    Get scheduled meetings, soonest first.

    Used by: meetings page.
    """
    filters = MeetingFilters(search=search, start_date=start_date, end_date=end_date)
    try:
        return await load_meetings(store, filters, options)
    except QueryFailure as e:
        logger.error(f"Meeting list failed: {e.message}")
        raise HTTPException(status_code=502, detail=VIEW_ERRORS["meetings"])
