"""API router for the log and status panels."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from catmonitor.errors import FetchFailure
from catmonitor.models import LogPanel, ResolveResult, StatusPanel
from catmonitor.services.dashboard import dashboard_service

dashboard_router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@dashboard_router.get("/logs", response_model=LogPanel)
def get_log_panel():
    """Dated log groups, newest first, with status-transition annotations."""
    try:
        return dashboard_service.get_log_panel()
    except FetchFailure as e:
        raise HTTPException(status_code=503, detail=e.message) from e


@dashboard_router.get("/status", response_model=StatusPanel)
def get_status_panel():
    """Status nodes in display order."""
    try:
        return dashboard_service.get_status_panel()
    except FetchFailure as e:
        raise HTTPException(status_code=503, detail=e.message) from e


@dashboard_router.get("/status/resolve", response_model=ResolveResult)
def resolve_context(context: str = Query(..., description="Log entry context to locate")):
    """Find the status node a log context points at."""
    try:
        return dashboard_service.resolve(context)
    except FetchFailure as e:
        raise HTTPException(status_code=503, detail=e.message) from e
