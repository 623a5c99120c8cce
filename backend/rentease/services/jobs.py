"""Scheduled jobs.

The daily expired lease sweep calls the same reconciliation entry point as
the listing routes, once per owner, each with its own session.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rentease.core.config import Settings, get_settings
from rentease.models.user import User
from rentease.services.leases import LeaseService, ReconcileResult

logger = logging.getLogger(__name__)

LEASE_SWEEP_JOB_ID = "expired_lease_sweep"


async def run_lease_sweep(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    today: Optional[date] = None,
) -> list[ReconcileResult]:
    """Reconcile expired leases for every owner.

    Args:
        session_factory: Session factory to use. Defaults to the app's.
        today: Reference date. Defaults to the current UTC date.

    Returns:
        Results of the passes that completed (failed passes are logged and skipped).
    """
    if session_factory is None:
        from rentease.core.database import async_session_maker
        session_factory = async_session_maker

    today = today or datetime.now(timezone.utc).date()
    logger.info(f"[SCHEDULER] Running daily expired lease check for {today.isoformat()}")

    try:
        async with session_factory() as db:
            owner_ids = (await db.execute(select(User.id).order_by(User.created_at))).scalars().all()
    except Exception as e:
        logger.error(f"[SCHEDULER] Expired lease check aborted, could not load owners: {e}")
        return []

    results = []
    for owner_id in owner_ids:
        async with session_factory() as db:
            result = await LeaseService(db).reconcile_expired_leases(owner_id, today=today)
        if result is not None:
            results.append(result)

    changed = sum(1 for r in results if r.changed)
    logger.info(
        f"[SCHEDULER] Daily expired lease check completed: "
        f"{len(owner_ids)} owner(s), {changed} with changes"
    )
    return results


def create_scheduler(settings: Optional[Settings] = None) -> AsyncIOScheduler:
    """Build the APScheduler instance with the lease sweep registered."""
    settings = settings or get_settings()
    scheduler = AsyncIOScheduler(timezone=settings.lease_sweep_timezone)

    if settings.lease_sweep_enabled:
        scheduler.add_job(
            run_lease_sweep,
            trigger=CronTrigger(
                hour=settings.lease_sweep_hour,
                minute=settings.lease_sweep_minute,
                timezone=settings.lease_sweep_timezone,
            ),
            id=LEASE_SWEEP_JOB_ID,
            name="Daily expired lease check",
            coalesce=True,
            misfire_grace_time=600,
            max_instances=1,
            replace_existing=True,
        )

    return scheduler


def start_scheduler(settings: Optional[Settings] = None) -> AsyncIOScheduler:
    """Create and start the scheduler on the running event loop."""
    scheduler = create_scheduler(settings)
    scheduler.start()

    for job in scheduler.get_jobs():
        next_run = job.next_run_time.strftime("%Y-%m-%d %H:%M:%S %Z") if job.next_run_time else "-"
        logger.info(f"[SCHEDULER] Registered job: {job.name} -> next run at {next_run}")

    return scheduler
