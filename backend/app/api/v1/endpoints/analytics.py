"""
Analytics Endpoints
Provides sentiment, confidence and indicator rollups over semantic analyses
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import AnalyticsFilters, AnalyticsRange
from app.services.dashboard_views import VIEW_ERRORS, AnalyticsView, ViewOptions, load_analytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=AnalyticsView)
async def get_analytics_summary(
    date_range: AnalyticsRange = Query("all", alias="range", description="7d, 30d, 90d or all"),
    store: RecordStore = Depends(get_record_store),
    options: ViewOptions = Depends(get_view_options)
):
    """
    Get analytics over semantic analyses in a date range.

    Used by: analytics page.

    Returns:
        - stats: sentiment distribution, average agent confidence and the
          top positive/negative indicators and buying signals
          (null when no analysis falls in the range)
    """
    try:
        return await load_analytics(store, AnalyticsFilters(date_range=date_range), options)
    except QueryFailure as e:
        logger.error(f"Analytics summary failed: {e.message}")
        raise HTTPException(status_code=502, detail=VIEW_ERRORS["analytics"])
