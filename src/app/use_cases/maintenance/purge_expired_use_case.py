"""
Use Case: Purge Expired Tombstones

Permanently removes soft-deleted records whose retention window has passed.
Runs on an interval from the scheduler; safe to run repeatedly.
"""

import logging
from datetime import datetime
from typing import Dict, Mapping, Optional

from src.libs.result import Result, Return
from src.app.services.event_sink import ENTITY_PURGED, DomainEvent, IEventSink, NullEventSink
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent
from src.domain.lifecycle import PURGE_ORDER, purge_cutoff

logger = logging.getLogger(__name__)


class PurgeExpiredUseCase:
    """
    Business Logic:
    1. Enable hard delete for this unit of work only
    2. Walk kinds leaves-first so no purged parent leaves children behind
    3. Delete tombstones with deleted_at older than the kind's retention
    4. Record one audit event per kind that lost rows
    5. Commit and return per-kind counts

    A second run over the same data removes nothing.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        retention_overrides: Optional[Mapping[str, int]] = None,
        events: Optional[IEventSink] = None,
    ):
        self.uow = uow
        self.retention_overrides = retention_overrides or {}
        self.events = events or NullEventSink()

    async def execute(self, now: Optional[datetime] = None) -> Result[Dict[str, int]]:
        now = now or utcnow()
        counts: Dict[str, int] = {}
        pending = []

        async with self.uow:
            self.uow.enable_hard_delete()
            for kind in PURGE_ORDER:
                cutoff = purge_cutoff(kind, now, self.retention_overrides)
                removed = await self.uow.repository(kind).purge_expired(cutoff)
                counts[kind.value] = removed
                if not removed:
                    continue

                await self.uow.audit_events.create(
                    AuditEvent(
                        action=ENTITY_PURGED,
                        entity_kind=kind.value,
                        event_metadata={"count": removed, "cutoff": cutoff.isoformat()},
                    )
                )
                pending.append(
                    DomainEvent(
                        name=ENTITY_PURGED,
                        entity_kind=kind.value,
                        payload={"count": removed},
                    )
                )
                logger.info(f"Purged {removed} expired {kind.value} records")

            await self.uow.commit()

        for event in pending:
            await self.events.publish(event)
        return Return.ok(counts)
