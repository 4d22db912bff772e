"""FastAPI application for the StopSearch backend."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from stopsearch.config import get_settings
from stopsearch.dependencies import limiter
from stopsearch.routers import dashboard_router, health_router, stop_searches_router
from stopsearch.services.collector import ThrottledCollector
from stopsearch.services.dashboard import Dashboard
from stopsearch.services.police_client import (
    NoDataAvailable,
    PoliceAPIClient,
    PoliceAPIError,
    UpstreamError,
    UpstreamRateLimited,
    UpstreamTimeout,
)
from stopsearch.tasks.scheduler import setup_scheduler, shutdown_scheduler

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting StopSearch backend...")

    client = PoliceAPIClient()
    app.state.police_client = client
    app.state.dashboard = Dashboard(ThrottledCollector(client))

    # Collection runs in the background so startup is not held up by it.
    setup_scheduler(app.state.dashboard)

    yield

    shutdown_scheduler()
    logger.info("StopSearch backend shut down")


app = FastAPI(
    title="StopSearch API",
    description="Metropolitan Police stop and search dashboard API - powered by data.police.uk",
    version="0.1.0",
    lifespan=lifespan,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _status_for(exc: PoliceAPIError) -> int:
    if isinstance(exc, NoDataAvailable):
        return 404
    if isinstance(exc, UpstreamRateLimited):
        return 429
    if isinstance(exc, UpstreamTimeout):
        return 408
    return 502


@app.exception_handler(PoliceAPIError)
async def police_api_exception_handler(request: Request, exc: PoliceAPIError):
    """Map upstream failures to client-facing status codes."""
    status_code = _status_for(exc)
    logger.warning(f"Upstream failure on {request.url.path}: {exc}")

    content: dict = {"detail": str(exc)}
    if isinstance(exc, UpstreamError) and exc.status_code is not None:
        content["upstream_status"] = exc.status_code
        content["upstream_detail"] = exc.detail

    return JSONResponse(status_code=status_code, content=content)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(health_router)
app.include_router(stop_searches_router, prefix=settings.api_v1_prefix)
app.include_router(dashboard_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "StopSearch API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stopsearch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
