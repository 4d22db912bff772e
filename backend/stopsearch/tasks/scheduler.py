"""Background task scheduler for refreshing the record collection."""

import logging
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from stopsearch.config import get_settings
from stopsearch.services.dashboard import Dashboard, RefreshInProgress

logger = logging.getLogger(__name__)
settings = get_settings()

# Global scheduler instance
scheduler: AsyncIOScheduler | None = None


async def refresh_dashboard_job(dashboard: Dashboard) -> None:
    """Background job to rebuild the dashboard collection from data.police.uk."""
    logger.info("Starting scheduled refresh")
    try:
        result = await dashboard.refresh()
        logger.info(f"Scheduled refresh complete: {len(result.records)} records")
    except RefreshInProgress:
        logger.info("Skipping scheduled refresh, one is already running")
    except Exception as e:
        logger.error(f"Scheduled refresh failed: {e}", exc_info=True)


def setup_scheduler(dashboard: Dashboard) -> AsyncIOScheduler:
    """Set up and start the background task scheduler."""
    global scheduler

    scheduler = AsyncIOScheduler()

    # Passing next_run_time=None would add the job paused
    job_options: dict = {}
    if settings.refresh_on_startup:
        job_options["next_run_time"] = datetime.now(UTC)

    scheduler.add_job(
        refresh_dashboard_job,
        trigger=IntervalTrigger(minutes=settings.refresh_interval_minutes),
        args=[dashboard],
        id="refresh_dashboard",
        name="Refresh stop and search data",
        replace_existing=True,
        max_instances=1,
        **job_options,
    )

    scheduler.start()
    logger.info("Scheduler started")

    return scheduler


def shutdown_scheduler() -> None:
    """Shut down the scheduler gracefully."""
    global scheduler

    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")
        scheduler = None
