"""
API Router
Combines all endpoint routers
"""
from fastapi import APIRouter
from app.api.v1.endpoints import (
    dashboard,
    conversations,
    meetings,
    analyses,
    analytics,
)

api_router = APIRouter()

# Dashboard views
api_router.include_router(dashboard.router)
api_router.include_router(conversations.router)
api_router.include_router(meetings.router)
api_router.include_router(analyses.router)
api_router.include_router(analytics.router)
