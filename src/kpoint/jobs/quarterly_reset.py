"""Background scheduler for quarterly balance resets."""

from __future__ import annotations

import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from ..core.config import get_settings
from ..core.database import SessionLocal
from ..core.policy import LedgerPolicy
from ..services.reset_service import reset_all

logger = logging.getLogger(__name__)

_settings = get_settings()
_scheduler = AsyncIOScheduler(timezone=_settings.scheduler_timezone)


async def _execute_quarterly_reset() -> None:
    session = SessionLocal()
    try:
        summary = reset_all(session, policy=LedgerPolicy.from_settings(_settings))
        session.commit()
        logger.info("quarterly reset completed: %s", summary)
    except Exception:  # pragma: no cover - safeguard for background job
        session.rollback()
        logger.exception("quarterly reset job failed")
        raise
    finally:
        session.close()


@_scheduler.scheduled_job(
    "cron",
    month="1,4,7,10",
    day="1",
    hour=0,
    minute=5,
    id="quarterly_reset",
    misfire_grace_time=3600,
)
async def _scheduled_job() -> None:
    await _execute_quarterly_reset()


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _settings.quarterly_reset_enabled:
            logger.info("quarterly reset scheduler disabled")
            return
        if not _scheduler.running:
            _scheduler.start()
            logger.info("quarterly reset scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("quarterly reset scheduler stopped")


def run_reset_once(current_time: datetime | None = None) -> dict[str, int]:
    """Convenience helper to run the reset synchronously for manual testing."""

    session = SessionLocal()
    try:
        summary = reset_all(session, policy=LedgerPolicy.from_settings(_settings), current_time=current_time)
        session.commit()
        return summary
    finally:
        session.close()
