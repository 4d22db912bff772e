"""API routes for the dashboard view and its filter and page state."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from stopsearch.config import get_settings
from stopsearch.dependencies import get_dashboard, limiter
from stopsearch.schemas.dashboard import DashboardView, FilterOptions
from stopsearch.services.dashboard import Dashboard, RefreshInProgress

settings = get_settings()
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
async def get_view(
    dashboard: Annotated[Dashboard, Depends(get_dashboard)],
) -> DashboardView:
    """Current page of filtered records with charts and headline stats."""
    return dashboard.view()


@router.put("/filters", response_model=DashboardView)
async def update_filters(
    filters: FilterOptions,
    dashboard: Annotated[Dashboard, Depends(get_dashboard)],
) -> DashboardView:
    """Replace the filter criteria. Returns to the first page."""
    dashboard.set_filters(filters)
    return dashboard.view()


@router.put("/pagination", response_model=DashboardView)
async def update_pagination(
    dashboard: Annotated[Dashboard, Depends(get_dashboard)],
    page: int | None = Query(None, ge=1),
    items_per_page: int | None = Query(None, ge=1, le=500),
) -> DashboardView:
    """
    Change the page size and/or current page.

    A new page size resets to page 1 before ``page`` is applied.
    """
    if items_per_page is not None:
        dashboard.set_items_per_page(items_per_page)
    if page is not None:
        dashboard.set_page(page)
    return dashboard.view()


@router.post("/refresh", response_model=DashboardView)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def refresh(
    request: Request,
    dashboard: Annotated[Dashboard, Depends(get_dashboard)],
) -> DashboardView:
    """
    Re-collect the most recent months from data.police.uk.

    Responds 409 while another refresh is running. A failed refresh keeps
    the previous data and reports the failure in ``error``.
    """
    try:
        await dashboard.refresh()
    except RefreshInProgress as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return dashboard.view()
