"""
Soft-delete lifecycle engine.

One code path for every tombstone: the root record is stamped, then every
declared cascade edge is walked recursively over active children with the
same timestamp. With a transactional unit of work the whole tree is written
in one transaction and any failure propagates; otherwise the root is
committed first and each failing cascade step is logged and skipped.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

from src.app.services.event_sink import (
    ENTITY_RESTORED,
    ENTITY_TOMBSTONED,
    DomainEvent,
    IEventSink,
    NullEventSink,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, EntityKind
from src.domain.errors import (
    DuplicateEntry,
    NotDeleted,
    ReferentialIntegrityViolation,
    RestoreConflict,
)
from src.domain.lifecycle import CASCADE_EDGES, UNIQUE_KEYS, CascadeEdge, UniqueKey, parent_edges

logger = logging.getLogger(__name__)


@dataclass
class CascadeReport:
    kind: EntityKind
    entity_id: UUID
    deleted_at: datetime
    cascaded: Dict[str, int] = field(default_factory=dict)
    failures: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.cascaded.values())


def organization_of(kind: EntityKind, entity: Any) -> Optional[UUID]:
    if kind == EntityKind.organization:
        return entity.id
    return getattr(entity, "organization_id", None)


class SoftDeleteService:
    def __init__(self, uow: UnitOfWork, events: Optional[IEventSink] = None):
        self.uow = uow
        self.events = events or NullEventSink()
        self.pending: List[DomainEvent] = []

    async def soft_delete(self, kind: EntityKind, entity: Any, actor_id: Optional[UUID] = None) -> CascadeReport:
        """
        Tombstone `entity` and everything it owns.

        Raises:
            AlreadyDeleted: entity is already tombstoned
            ReferentialIntegrityViolation: a child belongs to another organization
                (transactional stores only; otherwise logged)
        """
        kind = EntityKind(kind)
        at = utcnow()
        entity.soft_delete(actor_id, at)
        entity.touch()
        await self.uow.repository(kind).update(entity)
        if not self.uow.supports_transactions:
            await self.uow.commit()

        report = CascadeReport(kind=kind, entity_id=entity.id, deleted_at=at)
        organization_id = organization_of(kind, entity)
        await self._cascade(kind, entity.id, organization_id, actor_id, at, report, {entity.id})

        await self.uow.audit_events.create(
            AuditEvent(
                organization_id=organization_id,
                actor_id=actor_id,
                action=ENTITY_TOMBSTONED,
                entity_kind=kind.value,
                entity_id=entity.id,
                event_metadata={"cascaded": report.cascaded, "failures": report.failures},
            )
        )
        self.pending.append(
            DomainEvent(
                name=ENTITY_TOMBSTONED,
                entity_kind=kind.value,
                entity_id=entity.id,
                organization_id=organization_id,
                actor_id=actor_id,
                payload={"cascaded": report.cascaded},
            )
        )
        logger.info(f"Tombstoned {kind.value} {entity.id} with {report.total} descendants")
        return report

    async def _cascade(
        self,
        kind: EntityKind,
        parent_id: UUID,
        organization_id: Optional[UUID],
        actor_id: Optional[UUID],
        at: datetime,
        report: CascadeReport,
        seen: Set[UUID],
    ) -> None:
        for edge in CASCADE_EDGES.get(kind, ()):
            try:
                child_ids = await self._tombstone_children(edge, parent_id, organization_id, actor_id, at)
                if not self.uow.supports_transactions:
                    await self.uow.commit()
            except Exception as exc:
                if self.uow.supports_transactions:
                    logger.error(f"Cascade {kind.value} -> {edge.target.value} failed for {parent_id}: {exc}")
                    raise
                logger.exception(f"Cascade {kind.value} -> {edge.target.value} failed for {parent_id}")
                await self.uow.rollback()
                report.failures.append(f"{edge.target.value}:{parent_id}")
                continue

            child_ids = [child_id for child_id in child_ids if child_id not in seen]
            if not child_ids:
                continue
            seen.update(child_ids)
            report.cascaded[edge.target.value] = report.cascaded.get(edge.target.value, 0) + len(child_ids)

            if edge.target in CASCADE_EDGES:
                for child_id in child_ids:
                    await self._cascade(edge.target, child_id, organization_id, actor_id, at, report, seen)

    async def _tombstone_children(
        self,
        edge: CascadeEdge,
        parent_id: UUID,
        organization_id: Optional[UUID],
        actor_id: Optional[UUID],
        at: datetime,
    ) -> List[UUID]:
        repo = self.uow.repository(edge.target)
        filters = {edge.foreign_key: parent_id, **edge.match}
        children = await repo.find(filters)
        if not children:
            return []

        for child in children:
            child_org = getattr(child, "organization_id", None)
            if organization_id is not None and child_org is not None and child_org != organization_id:
                raise ReferentialIntegrityViolation(
                    f"{edge.target.value} {child.id} belongs to organization {child_org}, "
                    f"expected {organization_id}"
                )

        ids = [child.id for child in children]
        await repo.update_many(
            {"id": ids},
            {
                "is_deleted": True,
                "deleted_at": at,
                "deleted_by": actor_id if edge.propagate_actor else None,
                "updated_at": at,
            },
        )
        return ids

    async def restore(self, kind: EntityKind, entity: Any, actor_id: Optional[UUID] = None) -> Any:
        """
        Clear the tombstone of a single record. Children stay tombstoned.

        Raises:
            NotDeleted: entity is active
            RestoreConflict: an active record already holds one of its unique keys
            ReferentialIntegrityViolation: an owning record is missing or tombstoned
        """
        kind = EntityKind(kind)
        if not entity.is_deleted:
            raise NotDeleted(f"{kind.value} {entity.id} is not deleted")

        conflict = await self.find_conflict(kind, entity, exclude_id=entity.id)
        if conflict is not None:
            raise RestoreConflict(
                f"Cannot restore {kind.value}: {', '.join(conflict.fields)} conflicts with an existing record",
                fields=conflict.fields,
            )

        await self._ensure_parents_active(kind, entity)

        entity.restore()
        entity.touch()
        await self.uow.repository(kind).update(entity)

        organization_id = organization_of(kind, entity)
        await self.uow.audit_events.create(
            AuditEvent(
                organization_id=organization_id,
                actor_id=actor_id,
                action=ENTITY_RESTORED,
                entity_kind=kind.value,
                entity_id=entity.id,
            )
        )
        self.pending.append(
            DomainEvent(
                name=ENTITY_RESTORED,
                entity_kind=kind.value,
                entity_id=entity.id,
                organization_id=organization_id,
                actor_id=actor_id,
            )
        )
        return entity

    async def _ensure_parents_active(self, kind: EntityKind, entity: Any) -> None:
        for parent_kind, edge in parent_edges(kind):
            if any(getattr(entity, name, None) != value for name, value in edge.match.items()):
                continue
            parent_id = getattr(entity, edge.foreign_key, None)
            if parent_id is None:
                continue
            parent = await self.uow.repository(parent_kind).get_by_id(parent_id, include_deleted=True)
            if parent is None or parent.is_deleted:
                raise ReferentialIntegrityViolation(
                    f"Cannot restore {kind.value}: parent {parent_kind.value} {parent_id} is missing or deleted"
                )

    async def find_conflict(
        self, kind: EntityKind, record: Any, exclude_id: Optional[UUID] = None
    ) -> Optional[UniqueKey]:
        """First unique key `record` would collide on among active records"""
        repo = self.uow.repository(kind)
        exclude_ids = [exclude_id] if exclude_id is not None else []
        for key in UNIQUE_KEYS.get(EntityKind(kind), ()):
            if not key.applies_to(record):
                continue
            filters = key.filters_for(record)
            if any(filters[name] is None for name in key.fields):
                continue
            if await repo.count(filters, exclude_ids=exclude_ids) > 0:
                return key
        return None

    async def ensure_unique(self, kind: EntityKind, record: Any, exclude_id: Optional[UUID] = None) -> None:
        """Raises DuplicateEntry when create/update would break a unique key"""
        conflict = await self.find_conflict(kind, record, exclude_id=exclude_id)
        if conflict is not None:
            raise DuplicateEntry(
                f"{EntityKind(kind).value} with the same {', '.join(conflict.fields)} already exists",
                fields=conflict.fields,
            )

    async def publish_pending(self) -> None:
        """Hand queued events to the sink; call after the transaction commits"""
        pending, self.pending = self.pending, []
        for event in pending:
            await self.events.publish(event)
