"""
Recurring maintenance jobs.

Registered on the application's AsyncIOScheduler at startup. Each run opens
its own session; a failed run is logged and retried on the next interval.
"""

import logging
from typing import Mapping, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.event_sink import IEventSink
from src.app.services.presence_tracker import PresenceTracker
from src.app.use_cases.maintenance import PurgeExpiredUseCase
from src.app.use_cases.users import MarkInactiveAwayUseCase

logger = logging.getLogger(__name__)

PURGE_JOB_ID = "purge_expired_tombstones"
AUTO_AWAY_JOB_ID = "auto_away"


async def purge_expired(session_factory, retention_overrides: Optional[Mapping[str, int]], events: IEventSink) -> int:
    async with session_factory() as session:
        try:
            result = await PurgeExpiredUseCase(SqlAlchemyUnitOfWork(session), retention_overrides, events).execute()
        except Exception:
            logger.exception("Purge sweep failed")
            return 0
    if result.is_err():
        logger.error(f"Purge sweep failed: {result.error.code}")
        return 0
    return sum(result.value.values())


async def mark_inactive_away(session_factory, presence: PresenceTracker, events: IEventSink) -> int:
    async with session_factory() as session:
        try:
            result = await MarkInactiveAwayUseCase(SqlAlchemyUnitOfWork(session), presence, events).execute()
        except Exception:
            logger.exception("Auto-away sweep failed")
            return 0
    return result.value


def install_maintenance_jobs(
    scheduler: AsyncIOScheduler,
    session_factory,
    presence: PresenceTracker,
    events: IEventSink,
    purge_interval_minutes: int,
    retention_overrides: Optional[Mapping[str, int]] = None,
    enable_purge: bool = True,
) -> None:
    if enable_purge:
        scheduler.add_job(
            purge_expired,
            trigger=IntervalTrigger(minutes=purge_interval_minutes),
            args=[session_factory, retention_overrides, events],
            id=PURGE_JOB_ID,
            replace_existing=True,
            max_instances=1,
        )
        logger.info(f"Purge sweep installed (interval={purge_interval_minutes}m)")

    scheduler.add_job(
        mark_inactive_away,
        trigger=IntervalTrigger(minutes=1),
        args=[session_factory, presence, events],
        id=AUTO_AWAY_JOB_ID,
        replace_existing=True,
        max_instances=1,
    )
