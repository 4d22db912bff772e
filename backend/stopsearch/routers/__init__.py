"""API routers."""

from stopsearch.routers.dashboard import router as dashboard_router
from stopsearch.routers.health import router as health_router
from stopsearch.routers.stop_searches import router as stop_searches_router

__all__ = ["dashboard_router", "health_router", "stop_searches_router"]
