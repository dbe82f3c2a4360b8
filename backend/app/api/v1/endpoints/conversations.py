"""
Conversation History Endpoints
Provides the filtered call list with recordings and transcripts
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import ConversationFilters
from app.services.dashboard_views import (
    VIEW_ERRORS,
    ConversationsView,
    ViewOptions,
    load_conversations,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("/", response_model=ConversationsView)
async def list_conversations(
    recipient: str = Query("", description="Substring of the recipient number"),
    date: str = Query("", description="Call date (YYYY-MM-DD)"),
    store: RecordStore = Depends(get_record_store),
    options: ViewOptions = Depends(get_view_options)
):
    """
    Get calls, newest first.

    Used by: conversations page.

    Query params:
        - recipient: case-insensitive recipient number search
        - date: only calls made on this local calendar day
    """
    filters = ConversationFilters(recipient=recipient, date=date)
    try:
        return await load_conversations(store, filters, options)
    except QueryFailure as e:
        logger.error(f"Conversation list failed: {e.message}")
        raise HTTPException(status_code=502, detail=VIEW_ERRORS["conversations"])
