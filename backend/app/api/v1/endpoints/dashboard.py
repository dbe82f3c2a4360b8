"""
Dashboard Endpoints
Provides call statistics, recent calls and meetings for the overview page
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import DashboardFilters, DashboardRange
from app.services.dashboard_views import VIEW_ERRORS, DashboardView, ViewOptions, load_dashboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardView)
async def get_dashboard_summary(
    date_range: DashboardRange = Query("today", alias="range", description="today, 7d or 30d"),
    store: RecordStore = Depends(get_record_store),
    options: ViewOptions = Depends(get_view_options)
):
    """
    Get the dashboard overview for a date range.

    Used by: dashboard overview cards and the recent calls list.

    Returns:
        - stats: total calls, average duration, success rate
        - records: most recent calls in the range
        - meetings_in_period: meetings whose tour date falls in the range
    """
    try:
        return await load_dashboard(store, DashboardFilters(date_range=date_range), options)
    except QueryFailure as e:
        logger.error(f"Dashboard summary failed: {e.message}")
        raise HTTPException(status_code=502, detail=VIEW_ERRORS["dashboard"])
