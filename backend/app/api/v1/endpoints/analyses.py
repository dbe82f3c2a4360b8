"""
Semantic Analysis Endpoints
Provides the filtered analysis table with detail panel data
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import AnalysisFilters
from app.services.dashboard_views import VIEW_ERRORS, AnalysesView, ViewOptions, load_analyses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyses", tags=["analyses"])


@router.get("/", response_model=AnalysesView)
async def list_analyses(
    call_id: str = Query("", description="Exact call id; ignored when not an integer"),
    sentiment: str = Query("", description="positive, negative or neutral"),
    alert_status: str = Query("", description="ok, warning or error"),
    start_date: str = Query("", description="Earliest analysis date (YYYY-MM-DD)"),
    end_date: str = Query("", description="Latest analysis date (YYYY-MM-DD)"),
    store: RecordStore = Depends(get_record_store),
    options: ViewOptions = Depends(get_view_options)
):
    """
    Get semantic analyses, newest first.

    Used by: semantic analysis table.
    """
    filters = AnalysisFilters(
        call_id=call_id,
        sentiment=sentiment,
        alert_status=alert_status,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        return await load_analyses(store, filters, options)
    except QueryFailure as e:
        logger.error(f"Analysis list failed: {e.message}")
        raise HTTPException(status_code=502, detail=VIEW_ERRORS["analyses"])
